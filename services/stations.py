"""
Read queries over the stations table for station selection and search
"""

from typing import List, Optional
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from models.station import Station
import logging

logger = logging.getLogger(__name__)


class StationService:
    """Station lookups consumed by the analysis and presentation layer"""

    # Filter name -> column searched with substring matching
    SEARCHABLE_FIELDS = {
        "name": Station.name,
        "basin_code": Station.basin_code,
        "sub_basin_code": Station.sub_basin_code,
        "river_name": Station.river_name,
        "state_name": Station.state_name,
        "city_name": Station.city_name,
    }

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def get_all(self) -> List[Station]:
        result = await self.db.execute(select(Station).order_by(Station.name.asc()))
        return list(result.scalars().all())

    async def get_by_id(self, station_id: str) -> Optional[Station]:
        """Return the station or None; blank ids never match"""
        if not station_id or not station_id.strip():
            return None
        return await self.db.get(Station, station_id.strip())

    async def search(
        self,
        name: Optional[str] = None,
        basin_code: Optional[str] = None,
        sub_basin_code: Optional[str] = None,
        river_name: Optional[str] = None,
        state_name: Optional[str] = None,
        city_name: Optional[str] = None
    ) -> List[Station]:
        """
        Search stations with case-insensitive substring filters.

        Filters left as None or blank are ignored; all given filters must match.
        """
        values = {
            "name": name,
            "basin_code": basin_code,
            "sub_basin_code": sub_basin_code,
            "river_name": river_name,
            "state_name": state_name,
            "city_name": city_name,
        }

        query = select(Station)
        filters_applied = []

        for field, value in values.items():
            if value and value.strip():
                query = query.where(self.SEARCHABLE_FIELDS[field].ilike(f"%{value.strip()}%"))
                filters_applied.append(field)

        logger.debug(f"Station search filters: {filters_applied}")

        result = await self.db.execute(query.order_by(Station.name.asc()))
        return list(result.scalars().all())

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(Station))
        return result.scalar_one()
