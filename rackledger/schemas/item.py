from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import field_validator

from . import ApiModel, strip_nullable, strip_required


class ItemCreate(ApiModel):
    sku: str
    name: str
    barcode: Optional[str] = None

    @field_validator("sku", "name")
    @classmethod
    def _strip_required(cls, v: str) -> str:
        return strip_required(v)

    @field_validator("barcode")
    @classmethod
    def _strip_barcode(cls, v: Optional[str]) -> Optional[str]:
        return strip_nullable(v)


class ItemRead(ApiModel):
    id: UUID
    sku: str
    name: str
    barcode: Optional[str] = None
    created_at: Optional[datetime] = None
