from sqlalchemy import Column, Integer, String, Text, Float, Enum, JSON
from sqlalchemy.orm import relationship

from ..db.base import Base
from ..enums import OrderStatus, PaymentMethod, PaymentStatus
from ..models.base import TimeStampMixin


class Order(Base, TimeStampMixin):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    order_number = Column(String, nullable=False, unique=True, index=True)
    customer_id = Column(String, nullable=False, index=True)
    customer_email = Column(String, nullable=True)
    status = Column(Enum(OrderStatus), default=OrderStatus.PENDING)
    shipping_address = Column(JSON, nullable=False)
    destination = Column(String, nullable=False)
    region = Column(String, nullable=True)
    payment_method = Column(Enum(PaymentMethod), nullable=False)
    payment_status = Column(Enum(PaymentStatus), default=PaymentStatus.PENDING)
    subtotal = Column(Float, nullable=False)
    discount = Column(Float, default=0)
    shipping_cost = Column(Float, nullable=False)
    tax = Column(Float, nullable=False)
    total = Column(Float, nullable=False)
    coupon_code = Column(String, nullable=True)
    shipping_zone = Column(String, nullable=True)
    estimated_delivery = Column(String, nullable=True)
    tax_name = Column(String, nullable=True)
    notes = Column(Text, nullable=True)

    # Relationships
    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan", lazy="selectin")
