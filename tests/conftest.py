import os

# Must be set before rackledger.core.config is imported.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

from types import SimpleNamespace

import httpx
import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from rackledger.db.database import Base, get_async_session
from rackledger.main import app
from rackledger.services import master_service


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
async def client(session_maker):
    async def _override_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_async_session] = _override_session
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def masters(db):
    """Ids of one warehouse with two rack locations and item X.

    Plain ids only: a ledger rollback expires every ORM instance in the session.
    """
    wh = await master_service.create_warehouse(db, code="WH-A", name="Warehouse A")
    l1 = await master_service.create_location(db, code="R1-A1-01", warehouse_id=wh.id)
    l2 = await master_service.create_location(db, code="R1-A1-02", warehouse_id=wh.id)
    item = await master_service.create_item(db, sku="SKU-X", name="Item X", barcode="4006381333931")
    return SimpleNamespace(warehouse_id=wh.id, l1_id=l1.id, l2_id=l2.id, item_id=item.id)
