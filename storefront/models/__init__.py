from .coupon import Coupon, CouponUsage
from .order import Order
from .order_item import OrderItem
from .shipping_zone import ShippingZone
from .tax_rate import TaxRate


__all__ = [
    "Coupon",
    "CouponUsage",
    "Order",
    "OrderItem",
    "ShippingZone",
    "TaxRate",
]
