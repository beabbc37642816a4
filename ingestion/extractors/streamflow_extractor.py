"""
Per-station streamflow file extractor
"""

from typing import List, Dict, Any, Optional, Sequence
from pathlib import Path

from core.config import settings, RegionSource
from core.exceptions import (
    UnknownRegionError,
    SourceNotFoundError,
    MalformedSourceError
)
from ingestion.extractors.json_extractor import read_json_document
import logging

logger = logging.getLogger(__name__)


class StreamflowExtractor:
    """
    Extract monthly streamflow records from per-station files.

    Layout:
        <data_root>/<region>/<streamflow_subdir>/<station_id>.json

    Each file holds {"codigo_estacao": ..., "items": [month, ...]}.
    """

    def __init__(
        self,
        regions: Sequence[RegionSource],
        data_root: Path,
        streamflow_subdir: Optional[str] = None
    ):
        self.regions = list(regions)
        self.data_root = Path(data_root)
        self.streamflow_subdir = streamflow_subdir or settings.STREAMFLOW_SUBDIR

    def resolve_directory(self, region_id: str) -> Path:
        if region_id not in [r.name for r in self.regions]:
            raise UnknownRegionError(
                f"Region '{region_id}' not configured",
                context={
                    "region": region_id,
                    "configured_regions": [r.name for r in self.regions]
                }
            )

        directory = self.data_root / region_id / self.streamflow_subdir
        if not directory.is_dir():
            raise SourceNotFoundError(
                f"Streamflow directory not found: {directory}",
                context={"region": region_id, "file_path": str(directory)}
            )

        return directory

    def list_files(self, region_id: str) -> List[Path]:
        """JSON files of a region, sorted by name"""
        directory = self.resolve_directory(region_id)
        files = sorted(p for p in directory.iterdir() if p.is_file() and p.suffix == ".json")
        logger.info(f"JSON files found in {directory}: {len(files)}")
        return files

    @staticmethod
    def extract_station_id(file_path: Path) -> str:
        """Station id is the file name without extension"""
        return Path(file_path).stem

    async def fetch_data(self, file_path: Path) -> List[Dict[str, Any]]:
        """
        Read the monthly records of one station file.

        Returns:
            List of raw monthly records (not yet validated)
        """
        data = read_json_document(file_path)

        if not isinstance(data, dict) or not isinstance(data.get("items"), list):
            raise MalformedSourceError(
                "Invalid JSON structure - expected {codigo_estacao, items: [...]}",
                context={
                    "file_path": str(file_path),
                    "expected": "{codigo_estacao, items: [...]}"
                }
            )

        return data["items"]
