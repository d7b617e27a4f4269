"""Warehouse, location and item masters plus item search."""
import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..core.config import settings
from ..core.errors import Conflict, NotFound
from ..db.database import Item, Location, Warehouse

logger = logging.getLogger(__name__)


def _like_pattern(q: str) -> str:
    escaped = q.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


async def _commit_or_conflict(db: AsyncSession, message: str) -> None:
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race with a concurrent create of the same key.
        await db.rollback()
        raise Conflict(message)


async def list_warehouses(db: AsyncSession) -> List[Warehouse]:
    res = await db.execute(select(Warehouse).order_by(Warehouse.code.asc()))
    return list(res.scalars().all())


async def create_warehouse(
    db: AsyncSession, *, code: str, name: str, address: Optional[str] = None
) -> Warehouse:
    existing = await db.execute(select(Warehouse).where(Warehouse.code == code))
    if existing.scalar_one_or_none():
        raise Conflict("Warehouse code already exists")

    m = Warehouse(code=code, name=name, address=address)
    db.add(m)
    await _commit_or_conflict(db, "Warehouse code already exists")
    await db.refresh(m)
    logger.info("created warehouse %s (%s)", m.code, m.id)
    return m


async def list_locations(db: AsyncSession, *, warehouse_id: Optional[UUID] = None) -> List[Location]:
    stmt = select(Location).options(selectinload(Location.warehouse))
    if warehouse_id:
        stmt = stmt.where(Location.warehouse_id == warehouse_id)
    res = await db.execute(stmt.order_by(Location.code.asc()))
    return list(res.scalars().all())


async def create_location(
    db: AsyncSession, *, code: str, warehouse_id: UUID, description: Optional[str] = None
) -> Location:
    warehouse = await db.get(Warehouse, warehouse_id)
    if not warehouse:
        raise NotFound("Warehouse not found")

    existing = await db.execute(
        select(Location).where(Location.code == code, Location.warehouse_id == warehouse_id)
    )
    if existing.scalar_one_or_none():
        raise Conflict(f"Location {code} already exists in warehouse {warehouse.code}")

    m = Location(code=code, description=description, warehouse_id=warehouse_id)
    db.add(m)
    await _commit_or_conflict(db, f"Location {code} already exists in warehouse {warehouse.code}")

    res = await db.execute(
        select(Location)
        .options(selectinload(Location.warehouse))
        .where(Location.id == m.id)
        .execution_options(populate_existing=True)
    )
    m = res.scalar_one()
    logger.info("created location %s in %s (%s)", m.code, warehouse.code, m.id)
    return m


async def list_items(db: AsyncSession) -> List[Item]:
    res = await db.execute(select(Item).order_by(Item.sku.asc()))
    return list(res.scalars().all())


async def create_item(
    db: AsyncSession, *, sku: str, name: str, barcode: Optional[str] = None
) -> Item:
    existing = await db.execute(select(Item).where(Item.sku == sku))
    if existing.scalar_one_or_none():
        raise Conflict("SKU already exists")

    m = Item(sku=sku, name=name, barcode=barcode)
    db.add(m)
    await _commit_or_conflict(db, "SKU already exists")
    await db.refresh(m)
    logger.info("created item %s (%s)", m.sku, m.id)
    return m


async def search_items(db: AsyncSession, q: Optional[str], *, limit: Optional[int] = None) -> List[Item]:
    """Case-insensitive substring match over SKU, name and barcode."""
    q = (q or "").strip()
    if not q:
        return []
    cap = settings.search_limit
    limit = cap if limit is None else max(1, min(int(limit), cap))

    like = _like_pattern(q)
    stmt = (
        select(Item)
        .where(
            or_(
                func.lower(Item.sku).like(like, escape="\\"),
                func.lower(Item.name).like(like, escape="\\"),
                func.lower(func.coalesce(Item.barcode, "")).like(like, escape="\\"),
            )
        )
        .order_by(Item.sku.asc())
        .limit(limit)
    )
    res = await db.execute(stmt)
    return list(res.scalars().all())
