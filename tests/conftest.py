import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("MAIL_SUPPRESS_SEND", "true")
os.environ.setdefault("CURRENCY_SYMBOL", "$")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from storefront import app  # noqa: E402
from storefront import models  # noqa: E402,F401
from storefront.core.dependencies import get_db  # noqa: E402
from storefront.db.base import Base  # noqa: E402
from storefront.enums import DiscountType  # noqa: E402
from storefront.models import Coupon, ShippingZone, TaxRate  # noqa: E402


@pytest.fixture
async def engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    """HTTP client bound to the app with the test database."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
async def save20(db_session):
    """20% off, min order 50, capped at 30, single global use."""
    coupon = Coupon(
        code="SAVE20",
        discount_type=DiscountType.PERCENTAGE,
        discount_value=20,
        min_order_value=50,
        max_discount=30,
        max_uses=1,
        per_user_limit=1,
        used_count=0,
        is_active=True,
    )
    db_session.add(coupon)
    await db_session.commit()
    await db_session.refresh(coupon)
    return coupon


@pytest.fixture
async def flat10(db_session):
    """Fixed 10 off, no minimum, two uses per user."""
    coupon = Coupon(
        code="FLAT10",
        discount_type=DiscountType.FIXED,
        discount_value=10,
        min_order_value=0,
        per_user_limit=2,
        used_count=0,
        is_active=True,
    )
    db_session.add(coupon)
    await db_session.commit()
    await db_session.refresh(coupon)
    return coupon


@pytest.fixture
async def domestic_zone(db_session):
    zone = ShippingZone(
        name="Domestic",
        pincodes=["10001", "10002", "10003"],
        base_cost=5.99,
        per_kg_cost=1.5,
        min_days=2,
        max_days=4,
        free_above=50,
        is_active=True,
    )
    db_session.add(zone)
    await db_session.commit()
    await db_session.refresh(zone)
    return zone


@pytest.fixture
async def us_tax(db_session):
    rate = TaxRate(name="US Sales Tax", rate=7.5, region="US", is_active=True)
    db_session.add(rate)
    await db_session.commit()
    await db_session.refresh(rate)
    return rate


@pytest.fixture
async def default_tax(db_session):
    rate = TaxRate(name="GST", rate=18, region=None, is_active=True)
    db_session.add(rate)
    await db_session.commit()
    await db_session.refresh(rate)
    return rate
