from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.database import get_async_session
from ..schemas.location import LocationCreate, LocationRead
from ..services import master_service

router = APIRouter()


@router.get("/locations", response_model=List[LocationRead])
async def list_locations(
    warehouse_id: Optional[UUID] = Query(None, alias="warehouseId"),
    db: AsyncSession = Depends(get_async_session),
):
    """Locations with their owning warehouse."""
    locations = await master_service.list_locations(db, warehouse_id=warehouse_id)
    return [loc.to_schema for loc in locations]


@router.post("/locations", response_model=LocationRead, status_code=status.HTTP_201_CREATED)
async def create_location(payload: LocationCreate, db: AsyncSession = Depends(get_async_session)):
    m = await master_service.create_location(
        db,
        code=payload.code,
        description=payload.description,
        warehouse_id=payload.warehouse_id,
    )
    return m.to_schema
