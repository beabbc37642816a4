"""
Pydantic schemas for data validation and serialization.

This package defines Pydantic models used throughout the import pipeline:

Schemas:
    station: Station catalog records (catalog JSON aliases → table columns)
    streamflow: Daily streamflow rows, monthly aggregates, expanded months
    results: Per-region results and aggregate import summaries

Usage:
    from schemas.station import StationCreate
    from schemas.results import RegionResult, ImportSummary

Example:
    station = StationCreate(**{"id": "84100000", "nome": "RIO DO SUL",
                               "tipoEstacao": "Fluviometrica"})
    assert station.name == "RIO DO SUL"
    assert station.river_name is None

Validation:
    Schemas reject records missing id, name or type and normalize blank
    optional values to null.
"""

__all__ = [
    "StationCreate",
    "DailyStreamflowCreate",
    "MonthlyStatCreate",
    "StreamflowMonth",
    "RegionResult",
    "ImportSummary",
    "StreamflowFileResult",
    "StreamflowRegionResult",
    "StreamflowSummary",
]
