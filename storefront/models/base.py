from datetime import datetime
from sqlalchemy import Column, DateTime


class TimeStampMixin:
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=True, default=datetime.now, onupdate=datetime.now)
