from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import field_validator

from . import ApiModel, strip_nullable, strip_required
from .warehouse import WarehouseRead


class LocationCreate(ApiModel):
    code: str
    description: Optional[str] = None
    warehouse_id: UUID

    @field_validator("code")
    @classmethod
    def _strip_code(cls, v: str) -> str:
        return strip_required(v)

    @field_validator("description")
    @classmethod
    def _strip_description(cls, v: Optional[str]) -> Optional[str]:
        return strip_nullable(v)


class LocationRead(ApiModel):
    id: UUID
    code: str
    description: Optional[str] = None
    warehouse_id: UUID
    created_at: Optional[datetime] = None
    warehouse: Optional[WarehouseRead] = None
