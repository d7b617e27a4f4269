import uuid
from sqlalchemy import Column, DateTime, ForeignKey, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


class Location(Base):
    __tablename__ = "locations"
    __table_args__ = (
        UniqueConstraint("code", "warehouse_id", name="ux_locations_code_warehouse"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    code = Column(String(50), index=True, nullable=False)
    description = Column(Text, nullable=True)
    warehouse_id = Column(Uuid, ForeignKey("warehouses.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    warehouse = relationship("Warehouse", back_populates="locations")

    @property
    def to_schema(self):
        """Location dict; includes the owning warehouse only when it is already loaded."""
        out = {
            "id": self.id,
            "code": self.code,
            "description": self.description,
            "warehouse_id": self.warehouse_id,
            "created_at": self.created_at,
        }
        if "warehouse" in self.__dict__ and self.warehouse is not None:
            out["warehouse"] = self.warehouse.to_schema
        return out
