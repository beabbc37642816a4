from sqlalchemy import Column, String, Float, DateTime, Index, func
from sqlalchemy.orm import relationship
from models.base import Base


class Station(Base):
    """
    One fluviometric monitoring station.

    Design:
    - id is the external station code and never changes
    - Re-imports overwrite every attribute except created_at
    - Deleting a station cascades to its streamflow and monthly rows
    """
    __tablename__ = "stations"

    id = Column(String, primary_key=True)

    # Descriptive attributes
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)
    additional_code = Column(String, nullable=True)
    basin_code = Column(String, nullable=True)
    sub_basin_code = Column(String, nullable=True)
    river_name = Column(String, nullable=True)
    state_name = Column(String, nullable=True)
    city_name = Column(String, nullable=True)
    responsible_sigla = Column(String, nullable=True)
    operator_sigla = Column(String, nullable=True)

    # Numeric attributes (no range validation)
    drainage_area = Column(Float, nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    altitude = Column(Float, nullable=True)

    # Set by the store on first insert
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())

    # Relationships
    daily_streamflows = relationship(
        "DailyStreamflow",
        back_populates="station",
        cascade="all, delete-orphan",
        passive_deletes=True
    )
    monthly_stats = relationship(
        "MonthlyStat",
        back_populates="station",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    # Lookup indexes for station selection and search
    __table_args__ = (
        Index("idx_stations_name", "name"),
        Index("idx_stations_basin", "basin_code"),
        Index("idx_stations_state", "state_name"),
        Index("idx_stations_river", "river_name"),
    )

    def __repr__(self) -> str:
        return f"<Station id={self.id!r} name={self.name!r}>"
