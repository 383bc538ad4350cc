from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.ext.asyncio.session import AsyncSession
from sqlalchemy.orm import declarative_base, sessionmaker
from cafe_pos.core.config import settings

DB_URL = settings.DB_URL

engine = create_async_engine(DB_URL, future=True, echo=False)

Base = declarative_base()


def make_session_factory(bind: AsyncEngine) -> sessionmaker:
    return sessionmaker(
        bind=bind,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def init_models(bind: AsyncEngine = engine) -> None:
    # importing the models registers their tables on Base.metadata
    from cafe_pos.db.models import local_storage  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
