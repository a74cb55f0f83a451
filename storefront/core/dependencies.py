from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import AsyncGenerator

from ..db.database import AsyncSessionLocal
from ..services.coupon_service import CouponService
from ..services.order_service import OrderService
from ..services.pricing_service import PricingService
from ..services.shipping_service import ShippingService
from ..services.tax_service import TaxService


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Asynchronous dependency that provides a database session for FastAPI routes.

    Yields:
        AsyncSession: An instance of the asynchronous database session.

    Usage:
        Use as a dependency in FastAPI endpoints to access the database session.
        The session is automatically closed after the request is processed.
    """

    async with AsyncSessionLocal() as db:
        yield db


async def get_coupon_service(db: AsyncSession = Depends(get_db)) -> CouponService:
    return CouponService(db)


async def get_shipping_service(db: AsyncSession = Depends(get_db)) -> ShippingService:
    return ShippingService(db)


async def get_tax_service(db: AsyncSession = Depends(get_db)) -> TaxService:
    return TaxService(db)


async def get_pricing_service(db: AsyncSession = Depends(get_db)) -> PricingService:
    return PricingService(db)


async def get_order_service(db: AsyncSession = Depends(get_db)) -> OrderService:
    return OrderService(db)
