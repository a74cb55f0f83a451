from sqlalchemy import Column, Integer, String, Float, ForeignKey
from sqlalchemy.orm import relationship

from ..db.base import Base
from .base import TimeStampMixin


class OrderItem(Base, TimeStampMixin):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False)
    product_id = Column(String, nullable=False)  # catalog snapshot
    product_name = Column(String, nullable=True)
    quantity = Column(Integer, nullable=False)
    price = Column(Float, nullable=False)
    weight = Column(Float, nullable=False, default=0.0)

    # Relationships
    order = relationship("Order", back_populates="items")


    def __repr__(self):
        return f'<OrderItem(id={self.id}, order_id={self.order_id}, product_id={self.product_id}, quantity={self.quantity})>'
