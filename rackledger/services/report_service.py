"""Dashboard tiles and the JSON export snapshot."""
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.database import Inventory, Item, Location, Movement, Warehouse
from . import inventory_service, master_service


async def _count(db: AsyncSession, model) -> int:
    res = await db.execute(select(func.count()).select_from(model))
    return int(res.scalar_one() or 0)


async def dashboard_summary(db: AsyncSession) -> dict:
    total_quantity = (await db.execute(select(func.coalesce(func.sum(Inventory.quantity), 0)))).scalar_one()
    return {
        "total_skus": await _count(db, Item),
        "total_locations": await _count(db, Location),
        "total_warehouses": await _count(db, Warehouse),
        "total_quantity": int(total_quantity or 0),
        "movement_count": await _count(db, Movement),
    }


async def export_snapshot(db: AsyncSession) -> dict:
    """All masters and balances, read inside the session's single transaction."""
    warehouses = await master_service.list_warehouses(db)
    locations = await master_service.list_locations(db)
    items = await master_service.list_items(db)
    inventory = await inventory_service.list_inventory(db)

    return {
        "exported_at": datetime.now(timezone.utc),
        "warehouses": [w.to_schema for w in warehouses],
        "locations": [loc.to_schema for loc in locations],
        "items": [i.to_schema for i in items],
        "inventory": [inv.to_schema for inv in inventory],
    }
