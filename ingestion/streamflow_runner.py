"""
Streamflow Importer - loads per-station monthly files into daily_streamflows
and monthly_stats.

Each file is one transaction. Files whose station is not in the catalog are
skipped, files that cannot be read count as failed; a month that fails
validation or writing counts as one error.
"""

from pathlib import Path
from typing import Any, Optional, Sequence
import logging

from sqlalchemy import func, select

from core.config import settings, RegionSource
from core.database import DatabaseManager
from core.exceptions import SourceError
from ingestion.extractors.streamflow_extractor import StreamflowExtractor
from ingestion.loaders.sqlite_loader import SQLiteLoader, streamflow_upsert_statements
from ingestion.transformers.normalizer import StreamflowNormalizer
from models.station import Station
from models.streamflow import DailyStreamflow, MonthlyStat
from schemas.results import (
    StreamflowFileResult,
    StreamflowRegionResult,
    StreamflowSummary
)

logger = logging.getLogger(__name__)


def _month_id(record: Any) -> Optional[str]:
    if isinstance(record, dict) and record.get("Data_Hora_Dado"):
        return str(record["Data_Hora_Dado"])
    return None


class StreamflowImporter:
    """
    Streamflow import orchestrator

    Responsibilities:
    - Walk each region's streamflow directory
    - Skip files for stations that are not in the catalog
    - Expand monthly records and upsert them through the bulk loader
    - Aggregate per-file and per-region counts
    """

    def __init__(
        self,
        db_manager: DatabaseManager,
        regions: Optional[Sequence[RegionSource]] = None,
        data_root: Optional[Path] = None,
        streamflow_subdir: Optional[str] = None
    ):
        self.db_manager = db_manager
        self.regions = list(regions if regions is not None else settings.REGIONS)
        self.extractor = StreamflowExtractor(
            regions=self.regions,
            data_root=data_root or settings.DATA_ROOT,
            streamflow_subdir=streamflow_subdir
        )

    async def _station_exists(self, station_id: str) -> bool:
        async with self.db_manager.session() as session:
            return await session.get(Station, station_id) is not None

    async def import_file(self, file_path: Path) -> StreamflowFileResult:
        """
        Import one station file.

        Returns:
            StreamflowFileResult; success=False when the station is unknown
            or the file cannot be read.
        """
        station_id = self.extractor.extract_station_id(file_path)
        logger.info(f"Processing file: {Path(file_path).name} (station {station_id})")

        if not await self._station_exists(station_id):
            logger.info(f"Station {station_id} not found in database - skipping")
            return StreamflowFileResult(
                success=False,
                station_id=station_id,
                skipped=True,
                error=f"Station {station_id} not found"
            )

        try:
            items = await self.extractor.fetch_data(file_path)
        except SourceError as e:
            logger.error(
                f"Error importing file {file_path}: {e.message}",
                extra={"error_context": e.to_dict()}
            )
            return StreamflowFileResult(success=False, station_id=station_id, error=e.message)

        if not items:
            logger.info(f"No monthly records found in {Path(file_path).name}")
            return StreamflowFileResult(success=True, station_id=station_id)

        normalizer = StreamflowNormalizer(station_id)

        async with self.db_manager.session() as session:
            loader = SQLiteLoader(session, table_name="daily_streamflows")
            result = await loader.load(
                items,
                transform=normalizer.normalize,
                statements=streamflow_upsert_statements,
                record_id=_month_id
            )

        # Each imported month wrote exactly one monthly_stats row
        monthly_records = result.successes
        daily_records = result.rows_written - monthly_records

        logger.info(
            f"Station {station_id}: {daily_records} daily records, "
            f"{monthly_records} monthly records, {result.failures} errors"
        )

        return StreamflowFileResult(
            success=True,
            station_id=station_id,
            daily_records=daily_records,
            monthly_records=monthly_records,
            errors=result.failures
        )

    async def import_region(self, region_id: str) -> StreamflowRegionResult:
        """Import every station file of a region"""
        logger.info(f"Importing streamflow for {region_id}...")

        try:
            files = self.extractor.list_files(region_id)
        except SourceError as e:
            logger.error(
                f"Error importing streamflow from {region_id}: {e.message}",
                extra={"error_context": e.to_dict()}
            )
            return StreamflowRegionResult(success=False, region=region_id, error=e.message)

        region_result = StreamflowRegionResult(success=True, region=region_id, files=len(files))

        for index, file_path in enumerate(files, start=1):
            logger.debug(f"[{index}/{len(files)}] {file_path.name}")
            result = await self.import_file(file_path)

            if result.success:
                region_result.daily_records += result.daily_records
                region_result.monthly_records += result.monthly_records
                region_result.errors += result.errors
            elif result.skipped:
                region_result.skipped += 1
            else:
                region_result.failed += 1

        logger.info(
            f"{region_id}: {region_result.files} files, "
            f"{region_result.daily_records} daily, {region_result.monthly_records} monthly, "
            f"{region_result.errors} errors, {region_result.skipped} skipped, "
            f"{region_result.failed} failed"
        )
        return region_result

    async def import_all(self) -> StreamflowSummary:
        """
        Import streamflow for every configured region in configuration order.

        Totals come from the store after all imports complete.
        """
        logger.info(f"Regions configured: {', '.join(r.name for r in self.regions)}")

        summary = StreamflowSummary()

        for region in self.regions:
            result = await self.import_region(region.name)
            summary.regions.append(result)

            if result.success:
                summary.imported += result.imported
                summary.errors += result.errors
                summary.skipped += result.skipped
                summary.failed += result.failed

        summary.daily_total, summary.monthly_total = await self._count_rows()

        logger.info(
            f"Streamflow import: {summary.imported} records imported, "
            f"{summary.errors} errors, {summary.skipped} files skipped, "
            f"{summary.failed} files failed"
        )
        logger.info(
            f"Daily records in DB: {summary.daily_total}, "
            f"monthly records in DB: {summary.monthly_total}"
        )
        return summary

    async def _count_rows(self):
        async with self.db_manager.session() as session:
            daily = await session.execute(select(func.count()).select_from(DailyStreamflow))
            monthly = await session.execute(select(func.count()).select_from(MonthlyStat))
            return daily.scalar_one(), monthly.scalar_one()
