from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from ..core.config import settings


class Base(DeclarativeBase):
    pass


engine = create_async_engine(settings.database_url, echo=settings.database_echo)
async_session_maker = async_sessionmaker(engine, expire_on_commit=False)


async def create_db_and_tables():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_maker() as session:
        yield session


# Models register themselves on Base.metadata when imported.
from .warehouse import Warehouse  # noqa: E402,F401
from .location import Location  # noqa: E402,F401
from .item import Item  # noqa: E402,F401
from .inventory.stock import Inventory, MAX_QUANTITY  # noqa: E402,F401
from .inventory.movement import Movement, MovementType  # noqa: E402,F401
