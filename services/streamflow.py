"""
Read queries over daily_streamflows and monthly_stats
"""

from datetime import date
from typing import List, Optional, Tuple
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from models.streamflow import DailyStreamflow, MonthlyStat


class StreamflowService:
    """
    Time-series access for a station.

    Daily series are returned in date order, as the percentile and Q7,10
    analyses expect.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def get_daily_streamflows(
        self,
        station_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> List[DailyStreamflow]:
        query = select(DailyStreamflow).where(DailyStreamflow.station_id == station_id)

        if start_date:
            query = query.where(DailyStreamflow.date >= start_date)
        if end_date:
            query = query.where(DailyStreamflow.date <= end_date)

        result = await self.db.execute(query.order_by(DailyStreamflow.date.asc()))
        return list(result.scalars().all())

    async def get_monthly_stats(self, station_id: str) -> List[MonthlyStat]:
        result = await self.db.execute(
            select(MonthlyStat)
            .where(MonthlyStat.station_id == station_id)
            .order_by(MonthlyStat.year.asc(), MonthlyStat.month.asc())
        )
        return list(result.scalars().all())

    async def get_date_range(self, station_id: str) -> Optional[Tuple[date, date]]:
        """First and last observation dates, or None without observations"""
        result = await self.db.execute(
            select(func.min(DailyStreamflow.date), func.max(DailyStreamflow.date))
            .where(DailyStreamflow.station_id == station_id)
        )
        first, last = result.one()
        if first is None:
            return None
        return first, last
