"""
Seed demo warehouses, locations, items and opening balances.

Run from the repo root:
  python -m rackledger.scripts.seed_demo_data

Uses the same DATABASE_URL as the API (dotenv supported by core.config).
Idempotent: existing rows are left alone, and opening balances are only
placed where the item/location pair has no inventory row yet.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.logging_setup import configure_logging
from ..db.database import Inventory, Item, Location, Warehouse, async_session_maker, create_db_and_tables
from ..services import inventory_service

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeedLocation:
    code: str
    warehouse_code: str
    description: Optional[str] = None


@dataclass(frozen=True)
class SeedItem:
    sku: str
    name: str
    barcode: Optional[str] = None


SEED_WAREHOUSES: list[tuple[str, str]] = [
    ("WH-A", "Warehouse A"),
    ("WH-B", "Warehouse B"),
]

SEED_LOCATIONS: list[SeedLocation] = [
    SeedLocation(code="R1-A1-01", warehouse_code="WH-A", description="Row 1 Aisle 1 Bin 01"),
    SeedLocation(code="R1-A1-02", warehouse_code="WH-A"),
    SeedLocation(code="R2-B1-01", warehouse_code="WH-B"),
]

SEED_ITEMS: list[SeedItem] = [
    SeedItem(sku="SKU-001", name="Sample Item 1", barcode="1234567890123"),
    SeedItem(sku="SKU-002", name="Sample Item 2"),
]

# (sku, location code, warehouse code, quantity)
SEED_BALANCES: list[tuple[str, str, str, int]] = [
    ("SKU-001", "R1-A1-01", "WH-A", 50),
    ("SKU-002", "R1-A1-02", "WH-A", 20),
]


async def get_or_create_warehouse(session: AsyncSession, code: str, name: str) -> Warehouse:
    res = await session.execute(select(Warehouse).where(Warehouse.code == code))
    wh = res.scalar_one_or_none()
    if wh:
        return wh
    wh = Warehouse(code=code, name=name)
    session.add(wh)
    await session.flush()
    return wh


async def get_or_create_location(session: AsyncSession, seed: SeedLocation, warehouse: Warehouse) -> Location:
    res = await session.execute(
        select(Location).where(Location.code == seed.code, Location.warehouse_id == warehouse.id)
    )
    loc = res.scalar_one_or_none()
    if loc:
        return loc
    loc = Location(code=seed.code, warehouse_id=warehouse.id, description=seed.description)
    session.add(loc)
    await session.flush()
    return loc


async def get_or_create_item(session: AsyncSession, seed: SeedItem) -> Item:
    res = await session.execute(select(Item).where(Item.sku == seed.sku))
    item = res.scalar_one_or_none()
    if item:
        return item
    item = Item(sku=seed.sku, name=seed.name, barcode=seed.barcode)
    session.add(item)
    await session.flush()
    return item


async def seed(session: AsyncSession) -> dict:
    """Create the demo masters and opening balances. Returns counts of what was placed."""
    warehouses = {}
    for code, name in SEED_WAREHOUSES:
        warehouses[code] = await get_or_create_warehouse(session, code, name)

    locations = {}
    for seed_loc in SEED_LOCATIONS:
        loc = await get_or_create_location(session, seed_loc, warehouses[seed_loc.warehouse_code])
        locations[(seed_loc.warehouse_code, seed_loc.code)] = loc

    items = {}
    for seed_item in SEED_ITEMS:
        items[seed_item.sku] = await get_or_create_item(session, seed_item)

    await session.commit()

    placed = 0
    for sku, loc_code, wh_code, qty in SEED_BALANCES:
        item = items[sku]
        loc = locations[(wh_code, loc_code)]
        res = await session.execute(
            select(Inventory.id).where(Inventory.item_id == item.id, Inventory.location_id == loc.id)
        )
        if res.scalar_one_or_none() is not None:
            continue
        # Through the ledger so opening stock has a PLACEMENT movement.
        await inventory_service.place(session, item_id=item.id, location_id=loc.id, qty=qty)
        placed += 1

    return {
        "warehouses": len(warehouses),
        "locations": len(locations),
        "items": len(items),
        "balances_placed": placed,
    }


async def main() -> None:
    configure_logging(settings.log_level)
    await create_db_and_tables()
    async with async_session_maker() as session:
        result = await seed(session)
    logger.info("seed complete: %s", result)


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
