import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import Config
from ..enums import DiscountType
from ..exceptions import (
    BadRequestException,
    ConflictException,
    CouponUsageLimitReachedException,
    NotFoundException,
)
from ..models import Coupon, CouponUsage
from ..repositories import CouponRepository
from ..schemas.coupon import (
    ApplyResult,
    CouponCreate,
    CouponSummary,
    CouponUpdate,
    ValidationResult,
)
from ..utils.money import round_money


logger = logging.getLogger(__name__)

NULLABLE_COUPON_FIELDS = {"description", "max_discount", "max_uses", "valid_until"}


def compute_discount(coupon: Coupon, order_total: float) -> float:
    """Discount a coupon grants on ``order_total``, capped and rounded to cents."""
    if coupon.discount_type == DiscountType.PERCENTAGE:
        discount = order_total * coupon.discount_value / 100
        # Apply max discount cap if set
        if coupon.max_discount is not None and discount > coupon.max_discount:
            discount = coupon.max_discount
    else:  # fixed amount
        discount = coupon.discount_value

    # Ensure discount doesn't exceed order total
    if discount > order_total:
        discount = order_total

    return round_money(discount)


class CouponService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = CouponRepository(db)


    def _convert_to_naive_datetime(self, dt: Optional[datetime]) -> Optional[datetime]:
        """Convert timezone-aware datetime to timezone-naive datetime"""
        if dt is None:
            return None
        if dt.tzinfo is not None:
            return dt.replace(tzinfo=None)
        return dt


    def _invalid(self, message: str) -> ValidationResult:
        return ValidationResult(valid=False, discount=0.0, message=message)


    # ==================== ADMIN ====================

    async def create_coupon(self, data: CouponCreate) -> Coupon:
        code = data.code.strip().upper()

        if await self.repository.find_by_code(code):
            raise ConflictException("Coupon code already exists")

        values = data.model_dump()
        values["code"] = code
        values["valid_from"] = self._convert_to_naive_datetime(data.valid_from) or datetime.now()
        values["valid_until"] = self._convert_to_naive_datetime(data.valid_until)

        coupon = await self.repository.add(Coupon(**values, used_count=0))
        await self.db.commit()
        await self.db.refresh(coupon)

        logger.info(f"Coupon {coupon.code} created")
        return coupon


    async def list_coupons(self, include_inactive: bool = False) -> List[Coupon]:
        return await self.repository.list(include_inactive)


    async def get_coupon(self, coupon_id: int, with_usages: bool = False) -> Coupon:
        coupon = await self.repository.get(coupon_id, with_usages=with_usages)
        if not coupon:
            raise NotFoundException("Coupon not found")
        return coupon


    async def update_coupon(self, coupon_id: int, data: CouponUpdate) -> Coupon:
        coupon = await self.get_coupon(coupon_id)
        changes = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_COUPON_FIELDS
        }

        # If updating code, check for duplicates
        if changes.get("code"):
            changes["code"] = changes["code"].strip().upper()
            if changes["code"] != coupon.code and await self.repository.find_by_code(changes["code"]):
                raise ConflictException("Coupon code already exists")

        for field in ("valid_from", "valid_until"):
            if field in changes:
                changes[field] = self._convert_to_naive_datetime(changes[field])

        for field, value in changes.items():
            setattr(coupon, field, value)

        if coupon.discount_type == DiscountType.PERCENTAGE and coupon.discount_value > 100:
            await self.db.rollback()
            raise BadRequestException("Percentage discount cannot exceed 100")

        await self.db.commit()
        await self.db.refresh(coupon)
        return coupon


    async def delete_coupon(self, coupon_id: int) -> None:
        coupon = await self.get_coupon(coupon_id)
        await self.repository.delete(coupon)
        await self.db.commit()
        logger.info(f"Coupon {coupon.code} deleted")


    # ==================== RULE EVALUATION ====================

    async def validate(self, code: str, order_total: float) -> ValidationResult:
        """
        Check a coupon code against an order total without side effects.

        Every "coupon not applicable" outcome is returned as ``valid=False``
        with a message; nothing here raises for business rule failures.
        """
        coupon = await self.repository.find_by_code(code)

        if not coupon:
            return self._invalid("Coupon not found")

        if not coupon.is_active:
            return self._invalid("Coupon is inactive")

        # Check validity period
        now = datetime.now()
        if coupon.valid_from and now < coupon.valid_from:
            return self._invalid("Coupon is not yet valid")

        if coupon.valid_until and now > coupon.valid_until:
            return self._invalid("Coupon has expired")

        # Check usage limit
        if coupon.max_uses is not None and coupon.used_count >= coupon.max_uses:
            return self._invalid("Coupon usage limit reached")

        # Check minimum order value
        if order_total < (coupon.min_order_value or 0):
            return self._invalid(f"Minimum order value is {Config.CURRENCY_SYMBOL}{coupon.min_order_value:.2f}")

        return ValidationResult(
            valid=True,
            discount=compute_discount(coupon, order_total),
            message="Coupon applied successfully",
            coupon=CouponSummary(
                id=coupon.id,
                code=coupon.code,
                discount_type=coupon.discount_type,
                discount_value=coupon.discount_value,
            ),
        )


    async def apply(self, code: str, order_total: float, user_id: str) -> ApplyResult:
        """
        Validate a coupon for a specific user, enforcing the per-user limit.

        Does not touch ``used_count``; call ``record_usage`` once the order
        is persisted, inside the same transaction.
        """
        validation = await self.validate(code, order_total)

        if not validation.valid:
            logger.info(f"Coupon {code.upper()} rejected for user {user_id}: {validation.message}")
            return ApplyResult(valid=False, discount=0.0, message=validation.message)

        coupon = await self.repository.find_by_code(code)

        # Check per-user usage limit
        user_usage_count = await self.repository.count_usage_by_user(coupon.id, user_id)
        if user_usage_count >= coupon.per_user_limit:
            logger.info(f"Coupon {coupon.code} per-user limit hit for user {user_id}")
            return ApplyResult(
                valid=False,
                discount=0.0,
                message="You have already used this coupon maximum times",
            )

        return ApplyResult(
            valid=True,
            discount=validation.discount,
            message=validation.message,
            coupon_id=coupon.id,
        )


    async def record_usage(self, coupon_id: int, user_id: str, order_id: Optional[int], discount: float) -> CouponUsage:
        """
        Record one redemption of a coupon against an order.

        Flushes but does not commit. Raises CouponUsageLimitReachedException
        when the cap was reached by a concurrent redemption; the caller must
        roll back and void the order.
        """
        if not await self.repository.increment_usage(coupon_id):
            logger.warning(f"Coupon {coupon_id} reached its usage cap while recording order {order_id}")
            raise CouponUsageLimitReachedException()

        usage = await self.repository.add_usage(coupon_id, user_id, order_id, round_money(discount))
        logger.info(f"Recorded usage of coupon {coupon_id} by user {user_id} on order {order_id}")
        return usage
