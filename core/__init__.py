"""
Core utilities and configuration for the hydrological data store.

This package provides foundational components used by the import pipeline
and the read services:

Modules:
    config: Application configuration, data locations and configured regions
    database: Embedded database lifecycle (DatabaseManager)
    exceptions: Custom exception hierarchy for error handling
    logging: Logging configuration and utilities

Usage:
    from core.config import settings
    from core.database import DatabaseManager, get_database_manager
    from core.exceptions import SourceNotFoundError, NotInitializedError
    from core.logging import setup_logging

Example:
    # Initialize logging
    setup_logging()

    # Open the store
    db = get_database_manager()
    await db.initialize()
    async with db.session() as session:
        # Perform database operations
        pass
    await db.close()
"""

__all__ = [
    "settings",
    "RegionSource",
    "DatabaseManager",
    "get_database_manager",
    "setup_logging",
    # Exceptions
    "HydroException",
    "StoreError",
    "NotInitializedError",
    "DatabaseError",
    "SourceError",
    "UnknownRegionError",
    "SourceNotFoundError",
    "MalformedSourceError",
    "RecordError",
    "RecordValidationError",
    "UpsertError",
]
