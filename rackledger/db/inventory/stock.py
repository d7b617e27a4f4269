import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base

# Upper bound of the Integer quantity column (32-bit signed on PostgreSQL).
MAX_QUANTITY = 2_147_483_647


class Inventory(Base):
    __tablename__ = "inventory"
    __table_args__ = (
        UniqueConstraint("item_id", "location_id", name="ux_inventory_item_location"),
        CheckConstraint("quantity >= 0", name="ck_inventory_quantity_non_negative"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    item_id = Column(Uuid, ForeignKey("items.id"), nullable=False, index=True)
    location_id = Column(Uuid, ForeignKey("locations.id"), nullable=False, index=True)

    quantity = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    item = relationship("Item")
    location = relationship("Location")

    @property
    def to_schema(self):
        out = {
            "id": self.id,
            "item_id": self.item_id,
            "location_id": self.location_id,
            "quantity": int(self.quantity or 0),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
        if "item" in self.__dict__ and self.item is not None:
            out["item"] = self.item.to_schema
        if "location" in self.__dict__ and self.location is not None:
            out["location"] = self.location.to_schema
        return out
