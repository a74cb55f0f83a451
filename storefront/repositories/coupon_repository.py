from typing import List, Optional

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..models import Coupon, CouponUsage


class CouponRepository:
    """
    Persistence access for coupons and their usage records.

    Write methods only flush; committing is left to the calling service so
    that usage recording can share a transaction with order creation.
    """

    def __init__(self, db: AsyncSession):
        self.db = db


    async def find_by_code(self, code: str) -> Optional[Coupon]:
        result = await self.db.execute(select(Coupon).filter_by(code=code.upper()))
        return result.scalars().first()


    async def get(self, coupon_id: int, with_usages: bool = False) -> Optional[Coupon]:
        query = select(Coupon).filter_by(id=coupon_id)
        if with_usages:
            query = query.options(selectinload(Coupon.usages))
        result = await self.db.execute(query)
        return result.scalars().first()


    async def list(self, include_inactive: bool = False) -> List[Coupon]:
        query = select(Coupon)
        if not include_inactive:
            query = query.where(Coupon.is_active == True)  # noqa: E712
        query = query.order_by(Coupon.created_at.desc(), Coupon.id.desc())
        result = await self.db.execute(query)
        return result.scalars().all()


    async def add(self, coupon: Coupon) -> Coupon:
        self.db.add(coupon)
        await self.db.flush()
        return coupon


    async def delete(self, coupon: Coupon) -> None:
        # usage rows reference the coupon, remove them first
        await self.db.execute(delete(CouponUsage).where(CouponUsage.coupon_id == coupon.id))
        await self.db.delete(coupon)
        await self.db.flush()


    async def count_usage_by_user(self, coupon_id: int, user_id: str) -> int:
        query = select(func.count(CouponUsage.id)).where(
            CouponUsage.coupon_id == coupon_id,
            CouponUsage.user_id == user_id,
        )
        result = await self.db.execute(query)
        return result.scalar_one()


    async def add_usage(self, coupon_id: int, user_id: str, order_id: Optional[int], discount: float) -> CouponUsage:
        usage = CouponUsage(
            coupon_id=coupon_id,
            user_id=user_id,
            order_id=order_id,
            discount=discount,
        )
        self.db.add(usage)
        await self.db.flush()
        return usage


    async def increment_usage(self, coupon_id: int) -> bool:
        """
        Atomically bump ``used_count`` unless the coupon is already at ``max_uses``.

        Returns False when no row matched, i.e. the cap was reached.
        """
        coupons = Coupon.__table__
        stmt = (
            update(coupons)
            .where(
                coupons.c.id == coupon_id,
                or_(coupons.c.max_uses.is_(None), coupons.c.used_count < coupons.c.max_uses),
            )
            .values(used_count=coupons.c.used_count + 1)
        )
        result = await self.db.execute(stmt)
        if result.rowcount != 1:
            return False

        # table-level update bypasses the identity map, reload any loaded instance
        await self.db.execute(
            select(Coupon).filter_by(id=coupon_id).execution_options(populate_existing=True)
        )
        return True
