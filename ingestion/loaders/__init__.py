from ingestion.loaders.sqlite_loader import (
    SQLiteLoader,
    station_upsert_statements,
    streamflow_upsert_statements,
)

__all__ = [
    "SQLiteLoader",
    "station_upsert_statements",
    "streamflow_upsert_statements",
]
