from sqlalchemy import Column, Integer, String, Float, Boolean

from ..db.base import Base
from .base import TimeStampMixin


class TaxRate(Base, TimeStampMixin):
    __tablename__ = "tax_rates"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    rate = Column(Float, nullable=False)  # percentage
    region = Column(String, nullable=True, index=True)  # NULL marks the default rate
    is_active = Column(Boolean, nullable=False, default=True)
