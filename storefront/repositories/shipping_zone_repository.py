from typing import Dict, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import ShippingZone


class ShippingZoneRepository:
    def __init__(self, db: AsyncSession):
        self.db = db


    async def _active_zones(self) -> List[ShippingZone]:
        query = select(ShippingZone).where(ShippingZone.is_active == True).order_by(ShippingZone.id)  # noqa: E712
        result = await self.db.execute(query)
        return result.scalars().all()


    async def find_zone_by_destination(self, destination: str) -> Optional[ShippingZone]:
        """First active zone (lowest id) whose pincode set contains the destination."""
        for zone in await self._active_zones():
            if destination in (zone.pincodes or []):
                return zone
        return None


    async def find_pincode_conflicts(self, pincodes: Iterable[str], exclude_zone_id: Optional[int] = None) -> Dict[str, str]:
        """Map each requested pincode already owned by another active zone to that zone's name."""
        wanted = set(pincodes)
        conflicts = {}
        for zone in await self._active_zones():
            if zone.id == exclude_zone_id:
                continue
            for pincode in wanted.intersection(zone.pincodes or []):
                conflicts.setdefault(pincode, zone.name)
        return conflicts


    async def get(self, zone_id: int) -> Optional[ShippingZone]:
        return await self.db.get(ShippingZone, zone_id)


    async def list(self, include_inactive: bool = False) -> List[ShippingZone]:
        query = select(ShippingZone)
        if not include_inactive:
            query = query.where(ShippingZone.is_active == True)  # noqa: E712
        result = await self.db.execute(query.order_by(ShippingZone.name))
        return result.scalars().all()


    async def add(self, zone: ShippingZone) -> ShippingZone:
        self.db.add(zone)
        await self.db.flush()
        return zone


    async def delete(self, zone: ShippingZone) -> None:
        await self.db.delete(zone)
        await self.db.flush()
