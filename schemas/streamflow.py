"""
Pydantic schemas for daily streamflow rows and monthly aggregates
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any
import datetime


class DailyStreamflowCreate(BaseModel):
    """One day's observation for a station"""
    station_id: str = Field(..., min_length=1)
    date: datetime.date
    flow_rate: Optional[float] = None
    status: Optional[int] = None
    consistency_level: Optional[int] = None

    def to_row(self) -> Dict[str, Any]:
        return self.dict()


class MonthlyStatCreate(BaseModel):
    """Monthly aggregate for a station"""
    station_id: str = Field(..., min_length=1)
    year: int = Field(..., ge=1)
    month: int = Field(..., ge=1, le=12)
    monthly_avg: Optional[float] = None
    monthly_max: Optional[float] = None
    monthly_min: Optional[float] = None
    valid_days: int = Field(0, ge=0)

    def to_row(self) -> Dict[str, Any]:
        return self.dict()


class StreamflowMonth(BaseModel):
    """
    A source monthly record expanded into its rows.

    One daily row per calendar day of the month plus the monthly aggregate.
    """
    station_id: str
    daily: List[DailyStreamflowCreate]
    monthly: MonthlyStatCreate
