import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base


class MovementType(str, enum.Enum):
    PLACEMENT = "PLACEMENT"
    RETRIEVAL = "RETRIEVAL"
    TRANSFER = "TRANSFER"


class Movement(Base):
    """Append-only audit record. Rows are inserted once and never updated."""

    __tablename__ = "movements"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_movements_quantity_positive"),
        CheckConstraint(
            "type IN ('PLACEMENT', 'RETRIEVAL', 'TRANSFER')",
            name="ck_movements_type",
        ),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    type = Column(String(20), nullable=False, index=True)

    item_id = Column(Uuid, ForeignKey("items.id"), nullable=False, index=True)
    # PLACEMENT: to only. RETRIEVAL: from only. TRANSFER: both.
    from_location_id = Column(Uuid, ForeignKey("locations.id"), nullable=True, index=True)
    to_location_id = Column(Uuid, ForeignKey("locations.id"), nullable=True, index=True)

    quantity = Column(Integer, nullable=False)
    # Microsecond resolution; the audit trail is listed newest first by this column.
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        index=True,
    )

    item = relationship("Item")
    from_location = relationship("Location", foreign_keys=[from_location_id])
    to_location = relationship("Location", foreign_keys=[to_location_id])

    @property
    def to_schema(self):
        return {
            "id": self.id,
            "type": self.type,
            "item_id": self.item_id,
            "from_location_id": self.from_location_id,
            "to_location_id": self.to_location_id,
            "quantity": int(self.quantity),
            "created_at": self.created_at,
        }
