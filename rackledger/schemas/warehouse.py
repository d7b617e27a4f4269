from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import field_validator

from . import ApiModel, strip_nullable, strip_required


class WarehouseCreate(ApiModel):
    code: str
    name: str
    address: Optional[str] = None

    @field_validator("code", "name")
    @classmethod
    def _strip_required(cls, v: str) -> str:
        return strip_required(v)

    @field_validator("address")
    @classmethod
    def _strip_address(cls, v: Optional[str]) -> Optional[str]:
        return strip_nullable(v)


class WarehouseRead(ApiModel):
    id: UUID
    code: str
    name: str
    address: Optional[str] = None
    created_at: Optional[datetime] = None
