import logging
from typing import Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import BadRequestException, ConflictException, NotFoundException, ShippingUnavailableException
from ..models import ShippingZone
from ..repositories import ShippingZoneRepository
from ..schemas.shipping import (
    ServiceabilityResult,
    ShippingQuote,
    ShippingZoneCreate,
    ShippingZoneUpdate,
    ZoneSummary,
)
from ..utils.money import round_money


logger = logging.getLogger(__name__)


class ShippingService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = ShippingZoneRepository(db)


    async def _ensure_pincodes_unclaimed(self, pincodes: Iterable[str], zone_id: Optional[int] = None) -> None:
        """A pincode may belong to at most one active zone."""
        conflicts = await self.repository.find_pincode_conflicts(pincodes, exclude_zone_id=zone_id)
        if conflicts:
            claimed = ", ".join(f"{pincode} ({zone})" for pincode, zone in sorted(conflicts.items()))
            raise ConflictException(f"Pincodes already assigned to another active zone: {claimed}")


    # ==================== ZONE MANAGEMENT (ADMIN) ====================

    async def create_zone(self, data: ShippingZoneCreate) -> ShippingZone:
        if data.is_active:
            await self._ensure_pincodes_unclaimed(data.pincodes)

        zone = await self.repository.add(ShippingZone(**data.model_dump()))
        await self.db.commit()
        await self.db.refresh(zone)

        logger.info(f"Shipping zone {zone.name} created with {len(zone.pincodes)} pincodes")
        return zone


    async def get_zone(self, zone_id: int) -> ShippingZone:
        zone = await self.repository.get(zone_id)
        if not zone:
            raise NotFoundException("Shipping zone not found")
        return zone


    async def list_zones(self, include_inactive: bool = False) -> List[ShippingZone]:
        return await self.repository.list(include_inactive)


    async def update_zone(self, zone_id: int, data: ShippingZoneUpdate) -> ShippingZone:
        zone = await self.get_zone(zone_id)
        # free_above is the only column that may be cleared
        changes = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None or field == "free_above"
        }

        min_days = changes.get("min_days", zone.min_days)
        max_days = changes.get("max_days", zone.max_days)
        if min_days > max_days:
            raise BadRequestException("min_days cannot be greater than max_days")

        if changes.get("is_active", zone.is_active):
            await self._ensure_pincodes_unclaimed(changes.get("pincodes", zone.pincodes), zone_id=zone.id)

        for field, value in changes.items():
            setattr(zone, field, value)

        await self.db.commit()
        await self.db.refresh(zone)
        return zone


    async def delete_zone(self, zone_id: int) -> None:
        zone = await self.get_zone(zone_id)
        await self.repository.delete(zone)
        await self.db.commit()
        logger.info(f"Shipping zone {zone.name} deleted")


    async def add_pincodes(self, zone_id: int, pincodes: List[str]) -> ShippingZone:
        zone = await self.get_zone(zone_id)

        # Merge and deduplicate pincodes, keeping the existing order
        merged = list(dict.fromkeys([*(zone.pincodes or []), *pincodes]))

        if zone.is_active:
            await self._ensure_pincodes_unclaimed(merged, zone_id=zone.id)

        zone.pincodes = merged
        await self.db.commit()
        await self.db.refresh(zone)
        return zone


    async def remove_pincodes(self, zone_id: int, pincodes: List[str]) -> ShippingZone:
        zone = await self.get_zone(zone_id)

        removed = set(pincodes)
        zone.pincodes = [p for p in (zone.pincodes or []) if p not in removed]

        await self.db.commit()
        await self.db.refresh(zone)
        return zone


    # ==================== PUBLIC SHIPPING CALCULATIONS ====================

    async def check_serviceability(self, destination: str) -> ServiceabilityResult:
        """Check if a pincode is served by an active zone"""
        zone = await self.repository.find_zone_by_destination(destination)

        if not zone:
            return ServiceabilityResult(serviceable=False)

        return ServiceabilityResult(
            serviceable=True,
            zone=ZoneSummary(
                id=zone.id,
                name=zone.name,
                base_cost=zone.base_cost,
                free_above=zone.free_above,
            ),
            estimated_days=zone.estimated_days,
        )


    async def calculate_shipping(self, destination: str, order_total: float, weight: float = 0) -> ShippingQuote:
        """
        Quote shipping for an order.

        Raises ShippingUnavailableException when no active zone serves the
        destination, since checkout cannot continue without a carrier.
        """
        zone = await self.repository.find_zone_by_destination(destination)

        if not zone:
            logger.warning(f"No active shipping zone for pincode {destination}")
            raise ShippingUnavailableException(destination)

        # Check if order qualifies for free shipping; a zero threshold means none
        if zone.free_above and order_total >= zone.free_above:
            return ShippingQuote(
                cost=0.0,
                is_free=True,
                estimated_days=zone.estimated_days,
                zone_name=zone.name,
            )

        # Calculate cost: base + (weight * per_kg_cost)
        cost = zone.base_cost + (weight or 0) * (zone.per_kg_cost or 0)

        return ShippingQuote(
            cost=round_money(cost),
            is_free=False,
            estimated_days=zone.estimated_days,
            zone_name=zone.name,
        )
