from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import TaxRate


class TaxRateRepository:
    def __init__(self, db: AsyncSession):
        self.db = db


    async def find_rate_by_region(self, region: str) -> Optional[TaxRate]:
        query = select(TaxRate).filter_by(region=region, is_active=True).order_by(TaxRate.id)
        result = await self.db.execute(query)
        return result.scalars().first()


    async def find_default_rate(self) -> Optional[TaxRate]:
        query = select(TaxRate).where(TaxRate.region.is_(None), TaxRate.is_active == True).order_by(TaxRate.id)  # noqa: E712
        result = await self.db.execute(query)
        return result.scalars().first()


    async def get(self, rate_id: int) -> Optional[TaxRate]:
        return await self.db.get(TaxRate, rate_id)


    async def list(self, include_inactive: bool = False) -> List[TaxRate]:
        query = select(TaxRate)
        if not include_inactive:
            query = query.where(TaxRate.is_active == True)  # noqa: E712
        result = await self.db.execute(query.order_by(TaxRate.id))
        return result.scalars().all()


    async def add(self, rate: TaxRate) -> TaxRate:
        self.db.add(rate)
        await self.db.flush()
        return rate


    async def delete(self, rate: TaxRate) -> None:
        await self.db.delete(rate)
        await self.db.flush()
