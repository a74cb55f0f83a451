from fastapi import APIRouter, Depends

from ..core.dependencies import get_coupon_service
from ..schemas.coupon import ApplyCouponRequest, ApplyResult, ValidateCouponRequest, ValidationResult
from ..services.coupon_service import CouponService


router = APIRouter()


@router.post("/validate", response_model=ValidationResult)
async def validate_coupon(
    data: ValidateCouponRequest,
    service: CouponService = Depends(get_coupon_service),
):
    """
    **Validate Coupon**

    Check a coupon code against a cart subtotal. Inapplicable coupons come
    back with `valid: false` and a message rather than an error status, so
    the cart can show the reason inline.
    """
    return await service.validate(data.code, data.order_total)


@router.post("/apply", response_model=ApplyResult)
async def apply_coupon(
    data: ApplyCouponRequest,
    service: CouponService = Depends(get_coupon_service),
):
    """
    **Apply Coupon**

    Same checks as validation plus the per-user redemption limit. Nothing is
    redeemed here; usage is recorded when the order is placed.
    """
    return await service.apply(data.code, data.order_total, data.user_id)
