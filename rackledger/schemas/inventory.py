from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import Field, StrictInt

from ..db.database import MAX_QUANTITY
from . import ApiModel
from .item import ItemRead
from .location import LocationRead
from .warehouse import WarehouseRead


MovementTypeName = Literal["PLACEMENT", "RETRIEVAL", "TRANSFER"]


class PlacementRequest(ApiModel):
    item_id: UUID
    location_id: UUID
    qty: StrictInt = Field(gt=0, le=MAX_QUANTITY)


class RetrievalRequest(ApiModel):
    item_id: UUID
    location_id: UUID
    qty: StrictInt = Field(gt=0, le=MAX_QUANTITY)


class TransferRequest(ApiModel):
    # from == to is rejected by the ledger, not here, so it gets its own error message
    item_id: UUID
    from_location_id: UUID
    to_location_id: UUID
    qty: StrictInt = Field(gt=0, le=MAX_QUANTITY)


class InventoryRead(ApiModel):
    id: UUID
    item_id: UUID
    location_id: UUID
    quantity: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    item: Optional[ItemRead] = None
    location: Optional[LocationRead] = None


class TransferResult(ApiModel):
    ok: bool = True
    from_: InventoryRead = Field(alias="from")
    to: InventoryRead


class MovementRead(ApiModel):
    id: UUID
    type: MovementTypeName
    item_id: UUID
    from_location_id: Optional[UUID] = None
    to_location_id: Optional[UUID] = None
    quantity: int
    created_at: Optional[datetime] = None


class DashboardSummary(ApiModel):
    total_skus: int
    total_locations: int
    total_warehouses: int
    total_quantity: int
    movement_count: int


class LedgerExport(ApiModel):
    exported_at: datetime
    warehouses: List[WarehouseRead]
    locations: List[LocationRead]
    items: List[ItemRead]
    inventory: List[InventoryRead]
