"""
SQLAlchemy ORM models for database tables.

This package defines the embedded database schema using SQLAlchemy ORM models:

Models:
    base: Base declarative class with the shared naming convention
    station: Fluviometric station metadata
    streamflow: Daily streamflow observations and monthly aggregates

Database Schema:
    All models inherit from the Base declarative class. Tables and indexes
    are created with create-if-absent semantics by core.database.

Usage:
    from models import Station, DailyStreamflow, MonthlyStat

Example:
    station = Station(id="84100000", name="RIO DO SUL", type="Fluviometrica")
    session.add(station)
    await session.commit()

Relationships:
    - Station → DailyStreamflow (one-to-many, cascade delete)
    - Station → MonthlyStat (one-to-many, cascade delete)
"""

from models.base import Base
from models.station import Station
from models.streamflow import DailyStreamflow, MonthlyStat

__all__ = [
    "Base",
    "Station",
    "DailyStreamflow",
    "MonthlyStat",
]
