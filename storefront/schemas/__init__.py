from .coupon import (
    ApplyCouponRequest,
    ApplyResult,
    CouponCreate,
    CouponDetail,
    CouponResponse,
    CouponUpdate,
    ValidateCouponRequest,
    ValidationResult,
)
from .order import (
    OrderCreate,
    OrderResponse,
    PlacedOrderResponse,
)
from .pricing import (
    PricingItem,
    PricingRequest,
    PricingResult,
)
from .shipping import (
    CalculateShippingRequest,
    PincodesRequest,
    ServiceabilityResult,
    ShippingQuote,
    ShippingZoneCreate,
    ShippingZoneResponse,
    ShippingZoneUpdate,
)
from .tax import (
    TaxRateCreate,
    TaxRateResponse,
    TaxRateUpdate,
    TaxResult,
)


__all__ = [
    # coupon schemas
    "ApplyCouponRequest",
    "ApplyResult",
    "CouponCreate",
    "CouponDetail",
    "CouponResponse",
    "CouponUpdate",
    "ValidateCouponRequest",
    "ValidationResult",

    # order schemas
    "OrderCreate",
    "OrderResponse",
    "PlacedOrderResponse",

    # pricing schemas
    "PricingItem",
    "PricingRequest",
    "PricingResult",

    # shipping schemas
    "CalculateShippingRequest",
    "PincodesRequest",
    "ServiceabilityResult",
    "ShippingQuote",
    "ShippingZoneCreate",
    "ShippingZoneResponse",
    "ShippingZoneUpdate",

    # tax schemas
    "TaxRateCreate",
    "TaxRateResponse",
    "TaxRateUpdate",
    "TaxResult",
]
