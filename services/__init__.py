"""
Read-only query services over the hydrological store.

Services:
    stations: Station listing, lookup, search and count
    streamflow: Daily series and monthly aggregates per station

Usage:
    async with db_manager.session() as session:
        stations = await StationService(session).search(state_name="SANTA")
        series = await StreamflowService(session).get_daily_streamflows("84100000")
"""

from services.stations import StationService
from services.streamflow import StreamflowService

__all__ = [
    "StationService",
    "StreamflowService",
]
