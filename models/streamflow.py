from sqlalchemy import (
    Column, Integer, String, Float, Date, ForeignKey, Index, UniqueConstraint
)
from sqlalchemy.orm import relationship
from models.base import Base


class DailyStreamflow(Base):
    """
    One streamflow observation per station and calendar date.

    flow_rate is null for missing or unmeasured days.
    """
    __tablename__ = "daily_streamflows"

    id = Column(Integer, primary_key=True, autoincrement=True)
    station_id = Column(
        String,
        ForeignKey("stations.id", ondelete="CASCADE"),
        nullable=False
    )
    date = Column(Date, nullable=False)

    flow_rate = Column(Float, nullable=True)
    status = Column(Integer, nullable=True)
    consistency_level = Column(Integer, nullable=True)

    station = relationship("Station", back_populates="daily_streamflows")

    __table_args__ = (
        UniqueConstraint("station_id", "date"),
        Index("idx_daily_streamflows_station_date", "station_id", "date"),
        Index("idx_daily_streamflows_date", "date"),
        {"sqlite_autoincrement": True},
    )


class MonthlyStat(Base):
    """
    Monthly aggregate per station: average, maximum, minimum and valid days.
    """
    __tablename__ = "monthly_stats"

    id = Column(Integer, primary_key=True, autoincrement=True)
    station_id = Column(
        String,
        ForeignKey("stations.id", ondelete="CASCADE"),
        nullable=False
    )
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)

    monthly_avg = Column(Float, nullable=True)
    monthly_max = Column(Float, nullable=True)
    monthly_min = Column(Float, nullable=True)
    valid_days = Column(Integer, nullable=True)

    station = relationship("Station", back_populates="monthly_stats")

    __table_args__ = (
        UniqueConstraint("station_id", "year", "month"),
        Index("idx_monthly_stats_station_year_month", "station_id", "year", "month"),
        {"sqlite_autoincrement": True},
    )
