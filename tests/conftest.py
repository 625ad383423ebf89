import pytest
from datetime import datetime, timezone
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from ares.models import UserProfile, DialogueSession  # noqa: F401  registers tables

# in-memory test db
TEST_DB_URL = "sqlite+aiosqlite:///:memory:"

@pytest.fixture
async def engine():
    engine = create_async_engine(
        TEST_DB_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()

@pytest.fixture
async def db(engine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

@pytest.fixture
async def user(db: AsyncSession) -> UserProfile:
    u = UserProfile(protocol_mode="enhanced,clinical", goal_keywords=["better sleep"])
    db.add(u)
    await db.commit()
    await db.refresh(u)
    return u

@pytest.fixture
def now() -> datetime:
    return datetime(2026, 10, 19, 18, 0, tzinfo=timezone.utc)
