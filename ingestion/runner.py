# ============================================================================
# File: ingestion/runner.py
# Description: Station catalog importer with per-region failure isolation
# ============================================================================
"""
Station Importer - loads region catalogs into the stations table.

This module provides:
- One atomic transaction per region
- Partial failure support (invalid or failing records are counted, not fatal)
- Region-level isolation (a failed region never stops the others)
- An aggregate summary with the store's authoritative station count
"""

from pathlib import Path
from typing import Optional, Sequence
import logging

from core.config import settings, RegionSource
from core.database import DatabaseManager
from core.exceptions import SourceError
from ingestion.extractors.json_extractor import StationCatalogExtractor
from ingestion.loaders.sqlite_loader import SQLiteLoader, station_upsert_statements
from ingestion.transformers.normalizer import StationNormalizer
from schemas.results import RegionResult, ImportSummary

logger = logging.getLogger(__name__)


class StationImporter:
    """
    Station catalog import orchestrator

    Responsibilities:
    - Resolve and read each region's catalog file
    - Validate and upsert every record inside one transaction per region
    - Convert region-fatal errors into failed RegionResults
    - Aggregate per-region counts
    """

    def __init__(
        self,
        db_manager: DatabaseManager,
        regions: Optional[Sequence[RegionSource]] = None,
        data_root: Optional[Path] = None,
        stations_subdir: Optional[str] = None
    ):
        self.db_manager = db_manager
        self.regions = list(regions if regions is not None else settings.REGIONS)
        self.extractor = StationCatalogExtractor(
            regions=self.regions,
            data_root=data_root or settings.DATA_ROOT,
            stations_subdir=stations_subdir
        )
        self.normalizer = StationNormalizer()

    async def import_region(self, region_id: str) -> RegionResult:
        """
        Import one region's catalog.

        Returns:
            RegionResult with imported/errors counts, or success=False with
            the error message when the source could not be read.

        Raises:
            NotInitializedError: If the store has not been initialized
            DatabaseError: If the region's transaction cannot be committed
        """
        logger.info(f"Importing stations from {region_id}...")

        try:
            records = await self.extractor.fetch_data(region_id)
        except SourceError as e:
            logger.error(
                f"Error importing {region_id}: {e.message}",
                extra={"error_context": e.to_dict()}
            )
            return RegionResult(success=False, error=e.message, region=region_id)

        async with self.db_manager.session() as session:
            loader = SQLiteLoader(session, table_name="stations")
            result = await loader.load(
                records,
                transform=self.normalizer.normalize,
                statements=station_upsert_statements
            )

        logger.info(f"{region_id}: {result.successes} imported, {result.failures} errors")

        return RegionResult(
            success=True,
            imported=result.successes,
            errors=result.failures,
            region=region_id
        )

    async def import_all(self) -> ImportSummary:
        """
        Import every configured region in configuration order.

        Failed regions contribute nothing to the totals but are kept in the
        per-region list. total is the station row count after all imports.
        """
        logger.info(f"Regions to import: {', '.join(r.name for r in self.regions)}")

        summary = ImportSummary()

        for region in self.regions:
            result = await self.import_region(region.name)
            summary.regions.append(result)

            if result.success:
                summary.imported += result.imported or 0
                summary.errors += result.errors or 0

        summary.total = await self.db_manager.count_stations()

        logger.info("Import Summary:")
        for r in summary.regions:
            if r.success:
                logger.info(f"{r.region}: {r.imported} stations")
            else:
                logger.info(f"{r.region}: {r.error}")
        logger.info(f"Total in database: {summary.total} stations")

        return summary


async def import_region(
    db_manager: DatabaseManager,
    region_id: str,
    regions: Optional[Sequence[RegionSource]] = None,
    data_root: Optional[Path] = None
) -> RegionResult:
    """Import a single region's stations with the given configuration"""
    importer = StationImporter(db_manager, regions=regions, data_root=data_root)
    return await importer.import_region(region_id)


async def import_all(
    db_manager: DatabaseManager,
    regions: Optional[Sequence[RegionSource]] = None,
    data_root: Optional[Path] = None
) -> ImportSummary:
    """Import every configured region's stations"""
    importer = StationImporter(db_manager, regions=regions, data_root=data_root)
    return await importer.import_all()
