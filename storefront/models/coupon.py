from sqlalchemy import Column, Integer, String, Float, DateTime, Boolean, Enum, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime

from ..db.base import Base
from ..enums import DiscountType
from .base import TimeStampMixin


class Coupon(Base, TimeStampMixin):
    __tablename__ = "coupons"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String, nullable=False, unique=True, index=True)  # always stored uppercase
    description = Column(String, nullable=True)
    discount_type = Column(Enum(DiscountType), nullable=False)
    discount_value = Column(Float, nullable=False)  # Either percentage or fixed amount
    min_order_value = Column(Float, nullable=False, default=0.0)
    max_discount = Column(Float, nullable=True)  # Cap for percentage coupons
    max_uses = Column(Integer, nullable=True)  # Global redemption cap
    per_user_limit = Column(Integer, nullable=False, default=1)
    valid_from = Column(DateTime, nullable=True, default=datetime.now)
    valid_until = Column(DateTime, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    used_count = Column(Integer, nullable=False, default=0)

    # Relationships
    usages = relationship("CouponUsage", back_populates="coupon", order_by="CouponUsage.id")


class CouponUsage(Base, TimeStampMixin):
    __tablename__ = "coupon_usages"

    id = Column(Integer, primary_key=True, index=True)
    coupon_id = Column(Integer, ForeignKey("coupons.id"), nullable=False, index=True)
    user_id = Column(String, nullable=False, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=True)
    discount = Column(Float, nullable=False)

    # Relationships
    coupon = relationship("Coupon", back_populates="usages")

    def __repr__(self):
        return f'<CouponUsage(id={self.id}, coupon_id={self.coupon_id}, user_id={self.user_id}, order_id={self.order_id})>'
