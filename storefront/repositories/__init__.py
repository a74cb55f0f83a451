from .coupon_repository import CouponRepository
from .shipping_zone_repository import ShippingZoneRepository
from .tax_rate_repository import TaxRateRepository


__all__ = [
    "CouponRepository",
    "ShippingZoneRepository",
    "TaxRateRepository",
]
