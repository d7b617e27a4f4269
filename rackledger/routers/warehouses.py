from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.database import get_async_session
from ..schemas.warehouse import WarehouseCreate, WarehouseRead
from ..services import master_service

router = APIRouter()


@router.get("/warehouses", response_model=List[WarehouseRead])
async def list_warehouses(db: AsyncSession = Depends(get_async_session)):
    warehouses = await master_service.list_warehouses(db)
    return [w.to_schema for w in warehouses]


@router.post("/warehouses", response_model=WarehouseRead, status_code=status.HTTP_201_CREATED)
async def create_warehouse(payload: WarehouseCreate, db: AsyncSession = Depends(get_async_session)):
    m = await master_service.create_warehouse(
        db, code=payload.code, name=payload.name, address=payload.address
    )
    return m.to_schema
