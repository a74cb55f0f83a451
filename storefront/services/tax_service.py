import logging
from typing import Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import ConflictException, NotFoundException
from ..models import TaxRate
from ..repositories import TaxRateRepository
from ..schemas.tax import TaxRateCreate, TaxRateUpdate, TaxResult
from ..utils.money import round_money


logger = logging.getLogger(__name__)

NO_TAX = "No Tax"


class TaxService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = TaxRateRepository(db)


    async def calculate_tax(self, subtotal: float, region: Optional[str] = None) -> TaxResult:
        """
        Tax due on ``subtotal`` for a region.

        Falls back to the default (region-less) rate, and to a zero "No Tax"
        result when no rate is configured at all.
        """
        # Try to find region-specific tax rate
        tax_rate = None
        if region:
            tax_rate = await self.repository.find_rate_by_region(region)

        # Fall back to default tax rate (no region)
        if not tax_rate:
            tax_rate = await self.repository.find_default_rate()

        if not tax_rate:
            return TaxResult(tax_amount=0.0, tax_rate=0.0, tax_name=NO_TAX)

        return TaxResult(
            tax_amount=round_money(subtotal * tax_rate.rate / 100),
            tax_rate=tax_rate.rate,
            tax_name=tax_rate.name,
        )


    # ==================== ADMIN ====================

    async def _ensure_single_default(self, exclude_rate_id: Optional[int] = None) -> None:
        current = await self.repository.find_default_rate()
        if current and current.id != exclude_rate_id:
            raise ConflictException(f"A default tax rate already exists: {current.name}")


    async def list_tax_rates(self, include_inactive: bool = False) -> List[TaxRate]:
        return await self.repository.list(include_inactive)


    async def get_tax_rate(self, rate_id: int) -> TaxRate:
        tax_rate = await self.repository.get(rate_id)
        if not tax_rate:
            raise NotFoundException("Tax rate not found")
        return tax_rate


    async def create_tax_rate(self, data: TaxRateCreate) -> TaxRate:
        region = data.region or None
        if region is None:
            await self._ensure_single_default()

        tax_rate = await self.repository.add(TaxRate(name=data.name, rate=data.rate, region=region, is_active=True))
        await self.db.commit()
        await self.db.refresh(tax_rate)

        logger.info(f"Tax rate {tax_rate.name} ({tax_rate.rate}%) created for region {region or 'default'}")
        return tax_rate


    async def update_tax_rate(self, rate_id: int, data: TaxRateUpdate) -> TaxRate:
        tax_rate = await self.get_tax_rate(rate_id)
        changes = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field == "region"
        }

        if "region" in changes:
            changes["region"] = changes["region"] or None

        region = changes.get("region", tax_rate.region)
        is_active = changes.get("is_active", tax_rate.is_active)
        if region is None and is_active:
            await self._ensure_single_default(exclude_rate_id=tax_rate.id)

        for field, value in changes.items():
            setattr(tax_rate, field, value)

        await self.db.commit()
        await self.db.refresh(tax_rate)
        return tax_rate


    async def delete_tax_rate(self, rate_id: int) -> Dict[str, str]:
        tax_rate = await self.get_tax_rate(rate_id)
        await self.repository.delete(tax_rate)
        await self.db.commit()
        return {"message": "Tax rate deleted"}
