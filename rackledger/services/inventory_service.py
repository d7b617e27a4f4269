"""
Inventory ledger: placement, retrieval and transfer.

Every mutation runs in one transaction on the caller's session and appends
exactly one Movement row. Sufficiency is decided by the database in the same
statement that decrements (``UPDATE ... WHERE quantity >= :qty``), so two
concurrent retrievals against the same row cannot both pass the check.
"""
import logging
import uuid
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, or_, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..core.errors import InsufficientQuantity, InvalidTransfer, LedgerError, NotFound, ValidationError
from ..db.database import Inventory, Item, Location, MAX_QUANTITY, Movement, MovementType

logger = logging.getLogger(__name__)

MAX_MOVEMENTS_LIMIT = 1000


def _require_positive_qty(qty) -> int:
    if isinstance(qty, bool) or not isinstance(qty, int) or qty <= 0:
        raise ValidationError("qty must be a positive integer")
    if qty > MAX_QUANTITY:
        raise ValidationError(f"qty must not exceed {MAX_QUANTITY}")
    return qty


def _dialect_insert(db: AsyncSession):
    name = db.get_bind().dialect.name
    if name == "postgresql":
        return pg_insert
    if name == "sqlite":
        return sqlite_insert
    raise RuntimeError(f"Unsupported database dialect for inventory upsert: {name}")


async def _ensure_item(db: AsyncSession, item_id: UUID) -> Item:
    item = await db.get(Item, item_id)
    if not item:
        raise NotFound("Item not found")
    return item


async def _ensure_location(db: AsyncSession, location_id: UUID) -> Location:
    location = await db.get(Location, location_id)
    if not location:
        raise NotFound("Location not found")
    return location


async def _credit(db: AsyncSession, *, item_id: UUID, location_id: UUID, qty: int) -> UUID:
    """Add qty to the (item, location) row, creating it at qty when absent.

    Raises ValidationError when the balance would pass MAX_QUANTITY.
    """
    tbl = Inventory.__table__
    insert = _dialect_insert(db)
    stmt = (
        insert(tbl)
        .values(id=uuid.uuid4(), item_id=item_id, location_id=location_id, quantity=qty)
        .on_conflict_do_update(
            index_elements=[tbl.c.item_id, tbl.c.location_id],
            set_={"quantity": tbl.c.quantity + qty, "updated_at": func.now()},
            where=tbl.c.quantity <= MAX_QUANTITY - qty,
        )
        .returning(tbl.c.id)
    )
    inventory_id = (await db.execute(stmt)).scalar_one_or_none()
    if inventory_id is None:
        raise ValidationError(f"Resulting quantity would exceed {MAX_QUANTITY}")
    return inventory_id


async def _debit(db: AsyncSession, *, item_id: UUID, location_id: UUID, qty: int) -> Optional[UUID]:
    """Subtract qty only if the row holds at least qty. Returns None when it does not."""
    tbl = Inventory.__table__
    stmt = (
        update(tbl)
        .where(
            tbl.c.item_id == item_id,
            tbl.c.location_id == location_id,
            tbl.c.quantity >= qty,
        )
        .values(quantity=tbl.c.quantity - qty, updated_at=func.now())
        .returning(tbl.c.id)
    )
    return (await db.execute(stmt)).scalar_one_or_none()


async def _load_inventory(db: AsyncSession, inventory_id: UUID) -> Inventory:
    res = await db.execute(
        select(Inventory)
        .options(selectinload(Inventory.item), selectinload(Inventory.location))
        .where(Inventory.id == inventory_id)
        .execution_options(populate_existing=True)
    )
    return res.scalar_one()


async def place(db: AsyncSession, *, item_id: UUID, location_id: UUID, qty: int) -> Inventory:
    """Record received stock at a location and return the updated balance row."""
    qty = _require_positive_qty(qty)
    try:
        await _ensure_item(db, item_id)
        await _ensure_location(db, location_id)

        inventory_id = await _credit(db, item_id=item_id, location_id=location_id, qty=qty)
        db.add(
            Movement(
                type=MovementType.PLACEMENT.value,
                item_id=item_id,
                to_location_id=location_id,
                quantity=qty,
            )
        )
        await db.commit()
    except LedgerError:
        await db.rollback()
        raise
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("placement failed item=%s location=%s qty=%s", item_id, location_id, qty)
        raise

    logger.info("placement item=%s location=%s qty=%s", item_id, location_id, qty)
    return await _load_inventory(db, inventory_id)


async def retrieve(db: AsyncSession, *, item_id: UUID, location_id: UUID, qty: int) -> Inventory:
    """Remove stock from a location. Raises InsufficientQuantity without touching the row."""
    qty = _require_positive_qty(qty)
    try:
        await _ensure_item(db, item_id)
        await _ensure_location(db, location_id)

        inventory_id = await _debit(db, item_id=item_id, location_id=location_id, qty=qty)
        if inventory_id is None:
            raise InsufficientQuantity()

        db.add(
            Movement(
                type=MovementType.RETRIEVAL.value,
                item_id=item_id,
                from_location_id=location_id,
                quantity=qty,
            )
        )
        await db.commit()
    except InsufficientQuantity:
        await db.rollback()
        logger.info("retrieval rejected item=%s location=%s qty=%s: insufficient quantity", item_id, location_id, qty)
        raise
    except LedgerError:
        await db.rollback()
        raise
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("retrieval failed item=%s location=%s qty=%s", item_id, location_id, qty)
        raise

    logger.info("retrieval item=%s location=%s qty=%s", item_id, location_id, qty)
    return await _load_inventory(db, inventory_id)


async def transfer(
    db: AsyncSession,
    *,
    item_id: UUID,
    from_location_id: UUID,
    to_location_id: UUID,
    qty: int,
) -> Tuple[Inventory, Inventory]:
    """
    Move stock between two locations.

    Debit of the source, credit of the destination and the TRANSFER movement
    commit together or not at all. Returns (source row, destination row).
    """
    if from_location_id == to_location_id:
        raise InvalidTransfer()
    qty = _require_positive_qty(qty)

    try:
        await _ensure_item(db, item_id)
        await _ensure_location(db, from_location_id)
        await _ensure_location(db, to_location_id)

        # Lock both balance rows in location order so opposite transfers cannot deadlock.
        # SQLite has no row locks and serializes writers instead.
        await db.execute(
            select(Inventory.id)
            .where(
                Inventory.item_id == item_id,
                Inventory.location_id.in_([from_location_id, to_location_id]),
            )
            .order_by(Inventory.location_id)
            .with_for_update()
        )

        source_id = await _debit(db, item_id=item_id, location_id=from_location_id, qty=qty)
        if source_id is None:
            raise InsufficientQuantity()
        dest_id = await _credit(db, item_id=item_id, location_id=to_location_id, qty=qty)

        db.add(
            Movement(
                type=MovementType.TRANSFER.value,
                item_id=item_id,
                from_location_id=from_location_id,
                to_location_id=to_location_id,
                quantity=qty,
            )
        )
        await db.commit()
    except InsufficientQuantity:
        await db.rollback()
        logger.info(
            "transfer rejected item=%s from=%s to=%s qty=%s: insufficient quantity",
            item_id, from_location_id, to_location_id, qty,
        )
        raise
    except LedgerError:
        await db.rollback()
        raise
    except SQLAlchemyError:
        await db.rollback()
        logger.exception(
            "transfer failed item=%s from=%s to=%s qty=%s",
            item_id, from_location_id, to_location_id, qty,
        )
        raise

    logger.info("transfer item=%s from=%s to=%s qty=%s", item_id, from_location_id, to_location_id, qty)
    return await _load_inventory(db, source_id), await _load_inventory(db, dest_id)


async def get_quantity(db: AsyncSession, *, item_id: UUID, location_id: UUID) -> int:
    res = await db.execute(
        select(Inventory.quantity).where(
            Inventory.item_id == item_id,
            Inventory.location_id == location_id,
        )
    )
    return int(res.scalar_one_or_none() or 0)


async def list_inventory(
    db: AsyncSession,
    *,
    item_id: Optional[UUID] = None,
    location_id: Optional[UUID] = None,
    warehouse_id: Optional[UUID] = None,
) -> List[Inventory]:
    stmt = (
        select(Inventory)
        .join(Location, Inventory.location_id == Location.id)
        .join(Item, Inventory.item_id == Item.id)
        .options(selectinload(Inventory.item), selectinload(Inventory.location))
    )
    if item_id:
        stmt = stmt.where(Inventory.item_id == item_id)
    if location_id:
        stmt = stmt.where(Inventory.location_id == location_id)
    if warehouse_id:
        stmt = stmt.where(Location.warehouse_id == warehouse_id)

    res = await db.execute(stmt.order_by(Item.sku.asc(), Location.code.asc()))
    return list(res.scalars().all())


async def list_movements(
    db: AsyncSession,
    *,
    item_id: Optional[UUID] = None,
    location_id: Optional[UUID] = None,
    movement_type: Optional[str] = None,
    limit: int = 200,
) -> List[Movement]:
    """Audit trail, newest first. location_id matches either side of a movement."""
    limit = max(1, min(int(limit), MAX_MOVEMENTS_LIMIT))
    stmt = select(Movement)
    if item_id:
        stmt = stmt.where(Movement.item_id == item_id)
    if location_id:
        stmt = stmt.where(
            or_(Movement.from_location_id == location_id, Movement.to_location_id == location_id)
        )
    if movement_type:
        stmt = stmt.where(Movement.type == movement_type)

    stmt = stmt.order_by(Movement.created_at.desc(), Movement.id.desc()).limit(limit)
    res = await db.execute(stmt)
    return list(res.scalars().all())
