from sqlalchemy import Column, Integer, String, Float, Boolean, JSON

from ..db.base import Base
from .base import TimeStampMixin


class ShippingZone(Base, TimeStampMixin):
    __tablename__ = "shipping_zones"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    pincodes = Column(JSON, nullable=False, default=list)  # list of destination identifiers
    base_cost = Column(Float, nullable=False)
    per_kg_cost = Column(Float, nullable=False, default=0.0)
    min_days = Column(Integer, nullable=False, default=3)
    max_days = Column(Integer, nullable=False, default=7)
    free_above = Column(Float, nullable=True)  # Orders at or above this total ship free
    is_active = Column(Boolean, nullable=False, default=True)

    @property
    def estimated_days(self) -> str:
        if self.min_days == self.max_days:
            return f"{self.min_days} days"
        return f"{self.min_days}-{self.max_days} days"

    def __repr__(self):
        return f'<ShippingZone(id={self.id}, name={self.name}, pincodes={len(self.pincodes or [])})>'
