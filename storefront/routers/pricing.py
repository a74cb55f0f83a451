from fastapi import APIRouter, Depends

from ..core.dependencies import get_pricing_service
from ..schemas.pricing import PricingRequest, PricingResult
from ..services.pricing_service import PricingService


router = APIRouter()


@router.post("/quote", response_model=PricingResult)
async def price_order(
    data: PricingRequest,
    service: PricingService = Depends(get_pricing_service),
):
    """
    **Price Order**

    Compute subtotal, coupon discount, shipping, tax and total for a cart
    without persisting anything.

    **Process:**
    1. Subtotal from item price and quantity
    2. Coupon discount (an invalid coupon prices at 0 discount and reports its message)
    3. Shipping on the discounted subtotal
    4. Tax on the discounted subtotal
    5. Total rounded to 2 decimals

    Returns 400 when no shipping zone serves the destination.
    """
    return await service.price_order(
        data.items,
        data.destination,
        coupon_code=data.coupon_code,
        region=data.region,
        weight=data.weight,
    )
