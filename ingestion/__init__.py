"""
Import pipeline components for loading source catalogs into the store.

This package contains all components for the Extract-Transform-Load pipeline:

Modules:
    base: Per-record outcomes and the LoadResult reducer
    runner: Station catalog importer (per-region and aggregate)
    streamflow_runner: Per-station streamflow importer

Subpackages:
    extractors: JSON source readers (station catalogs, streamflow files)
    transformers: Record validation and normalization
    loaders: Generic SQLite bulk upsert with per-record accounting

Architecture:
    Each import follows a three-phase approach:

    1. Extract - Resolve and parse the region's source file
    2. Transform - Validate each record into a schema
    3. Load - Upsert every valid record inside one transaction

    Source-level failures are fatal to one region only; record-level
    failures are counted and never abort the transaction.

Usage:
    from ingestion.runner import StationImporter
    from ingestion.streamflow_runner import StreamflowImporter

Example:
    importer = StationImporter(db_manager)
    summary = await importer.import_all()

    print(f"Imported {summary.imported} stations, {summary.total} in database")
"""

__all__ = [
    "RecordOutcome",
    "LoadResult",
    "StationImporter",
    "StreamflowImporter",
    "StationCatalogExtractor",
    "StreamflowExtractor",
    "StationNormalizer",
    "StreamflowNormalizer",
    "SQLiteLoader",
]
