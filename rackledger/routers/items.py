from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.database import get_async_session
from ..schemas.item import ItemCreate, ItemRead
from ..services import master_service

router = APIRouter()


@router.get("/items", response_model=List[ItemRead])
async def list_items(db: AsyncSession = Depends(get_async_session)):
    items = await master_service.list_items(db)
    return [i.to_schema for i in items]


@router.post("/items", response_model=ItemRead, status_code=status.HTTP_201_CREATED)
async def create_item(payload: ItemCreate, db: AsyncSession = Depends(get_async_session)):
    m = await master_service.create_item(db, sku=payload.sku, name=payload.name, barcode=payload.barcode)
    return m.to_schema


@router.get("/search", response_model=List[ItemRead])
async def search_items(
    q: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_async_session),
):
    """Search items by SKU, name or barcode. Blank queries return an empty list."""
    items = await master_service.search_items(db, q)
    return [i.to_schema for i in items]
