from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.database import get_async_session
from ..schemas.inventory import (
    InventoryRead,
    MovementRead,
    MovementTypeName,
    PlacementRequest,
    RetrievalRequest,
    TransferRequest,
    TransferResult,
)
from ..services import inventory_service

router = APIRouter()


@router.get("/inventory", response_model=List[InventoryRead])
async def list_inventory(
    item_id: Optional[UUID] = Query(None, alias="itemId"),
    location_id: Optional[UUID] = Query(None, alias="locationId"),
    warehouse_id: Optional[UUID] = Query(None, alias="warehouseId"),
    db: AsyncSession = Depends(get_async_session),
):
    rows = await inventory_service.list_inventory(
        db, item_id=item_id, location_id=location_id, warehouse_id=warehouse_id
    )
    return [r.to_schema for r in rows]


@router.post("/placement", response_model=InventoryRead)
async def create_placement(payload: PlacementRequest, db: AsyncSession = Depends(get_async_session)):
    inv = await inventory_service.place(
        db, item_id=payload.item_id, location_id=payload.location_id, qty=payload.qty
    )
    return inv.to_schema


@router.post("/retrieval", response_model=InventoryRead)
async def create_retrieval(payload: RetrievalRequest, db: AsyncSession = Depends(get_async_session)):
    """
    Remove stock from a location.

    400 {"error": "Insufficient quantity"} when the location holds less than qty.
    """
    inv = await inventory_service.retrieve(
        db, item_id=payload.item_id, location_id=payload.location_id, qty=payload.qty
    )
    return inv.to_schema


@router.post("/transfer", response_model=TransferResult)
async def create_transfer(payload: TransferRequest, db: AsyncSession = Depends(get_async_session)):
    """
    Move stock between two locations in one transaction.

    - 400 when source and destination are the same location.
    - 400 {"error": "Insufficient quantity"} when the source holds less than qty.
    """
    source, dest = await inventory_service.transfer(
        db,
        item_id=payload.item_id,
        from_location_id=payload.from_location_id,
        to_location_id=payload.to_location_id,
        qty=payload.qty,
    )
    return {"ok": True, "from": source.to_schema, "to": dest.to_schema}


@router.get("/movements", response_model=List[MovementRead])
async def list_movements(
    item_id: Optional[UUID] = Query(None, alias="itemId"),
    location_id: Optional[UUID] = Query(None, alias="locationId"),
    movement_type: Optional[MovementTypeName] = Query(None, alias="type"),
    limit: int = Query(200, ge=1, le=1000),
    db: AsyncSession = Depends(get_async_session),
):
    movements = await inventory_service.list_movements(
        db,
        item_id=item_id,
        location_id=location_id,
        movement_type=movement_type,
        limit=limit,
    )
    return [m.to_schema for m in movements]
