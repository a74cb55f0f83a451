import logging
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import Config
from ..schemas.pricing import PricingItem, PricingMetadata, PricingResult
from ..utils.money import round_money
from .coupon_service import CouponService
from .shipping_service import ShippingService
from .tax_service import TaxService


logger = logging.getLogger(__name__)


class PricingService:
    """
    Turns a cart snapshot plus checkout context into a final chargeable total.

    The steps run in a fixed order: subtotal, coupon discount, shipping on
    the discounted subtotal, tax on the discounted subtotal, total. Shipping's
    free threshold is checked against the discounted subtotal unless
    ``free_shipping_on_discounted_subtotal`` is switched off.
    """

    def __init__(self, db: AsyncSession, free_shipping_on_discounted_subtotal: Optional[bool] = None):
        self.db = db
        self.coupon_service = CouponService(db)
        self.shipping_service = ShippingService(db)
        self.tax_service = TaxService(db)
        if free_shipping_on_discounted_subtotal is None:
            free_shipping_on_discounted_subtotal = Config.FREE_SHIPPING_ON_DISCOUNTED_SUBTOTAL
        self.free_shipping_on_discounted_subtotal = free_shipping_on_discounted_subtotal


    @staticmethod
    def calculate_subtotal(items: Sequence[PricingItem]) -> float:
        return round_money(sum(item.price * item.quantity for item in items))


    @staticmethod
    def calculate_weight(items: Sequence[PricingItem]) -> float:
        return sum(item.weight * item.quantity for item in items)


    async def price_order(
        self,
        items: Sequence[PricingItem],
        destination: str,
        coupon_code: Optional[str] = None,
        region: Optional[str] = None,
        weight: Optional[float] = None,
    ) -> PricingResult:
        subtotal = self.calculate_subtotal(items)

        discount = 0.0
        coupon_message = None
        applied_code = None
        if coupon_code:
            validation = await self.coupon_service.validate(coupon_code, subtotal)
            discount = validation.discount
            coupon_message = validation.message
            if validation.valid:
                applied_code = validation.coupon.code

        discounted_subtotal = round_money(subtotal - discount)

        total_weight = weight if weight is not None else self.calculate_weight(items)
        threshold_basis = discounted_subtotal if self.free_shipping_on_discounted_subtotal else subtotal
        shipping = await self.shipping_service.calculate_shipping(destination, threshold_basis, total_weight)

        tax = await self.tax_service.calculate_tax(discounted_subtotal, region)

        total = round_money(discounted_subtotal + shipping.cost + tax.tax_amount)

        logger.debug(
            f"Priced {len(items)} items to {destination}: subtotal={subtotal} discount={discount} "
            f"shipping={shipping.cost} tax={tax.tax_amount} total={total}"
        )

        return PricingResult(
            subtotal=subtotal,
            discount=discount,
            shipping_cost=shipping.cost,
            tax_amount=tax.tax_amount,
            total=total,
            metadata=PricingMetadata(
                zone_name=shipping.zone_name,
                estimated_days=shipping.estimated_days,
                is_free_shipping=shipping.is_free,
                tax_name=tax.tax_name,
                tax_rate=tax.tax_rate,
                coupon_code=applied_code,
                coupon_message=coupon_message,
            ),
        )
