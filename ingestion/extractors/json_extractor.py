"""
JSON station catalog extractor for configured regions
"""

import json
from typing import List, Dict, Any, Optional, Sequence
from pathlib import Path

from core.config import settings, RegionSource
from core.exceptions import (
    UnknownRegionError,
    SourceNotFoundError,
    MalformedSourceError
)
import logging

logger = logging.getLogger(__name__)


def read_json_document(file_path: Path) -> Any:
    """
    Read and parse a JSON file.

    Raises:
        SourceNotFoundError: If the file disappeared before it could be opened
        MalformedSourceError: If the file cannot be read or is not valid JSON
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise SourceNotFoundError(
            f"Source file not found: {file_path}",
            context={"file_path": str(file_path)},
            original_exception=e
        )
    except OSError as e:
        raise MalformedSourceError(
            "Source file could not be read",
            context={"file_path": str(file_path)},
            original_exception=e
        )
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedSourceError(
            "Source file is not valid JSON",
            context={"file_path": str(file_path)},
            original_exception=e
        )


class StationCatalogExtractor:
    """
    Extract station records from per-region catalog files.

    Layout:
        <data_root>/<region>/<stations_subdir>/<region file>

    Each file holds {"content": [station, ...]}.
    """

    def __init__(
        self,
        regions: Sequence[RegionSource],
        data_root: Path,
        stations_subdir: Optional[str] = None
    ):
        self.regions = list(regions)
        self.data_root = Path(data_root)
        self.stations_subdir = stations_subdir or settings.STATIONS_SUBDIR

    def get_region(self, region_id: str) -> RegionSource:
        for region in self.regions:
            if region.name == region_id:
                return region

        raise UnknownRegionError(
            f"Region '{region_id}' not configured",
            context={
                "region": region_id,
                "configured_regions": [r.name for r in self.regions]
            }
        )

    def resolve_path(self, region_id: str) -> Path:
        """Locate the catalog file of a region, which must exist"""
        region = self.get_region(region_id)
        file_path = self.data_root / region.name / self.stations_subdir / region.file

        if not file_path.is_file():
            raise SourceNotFoundError(
                f"Stations file not found for {region.name}",
                context={"region": region.name, "file_path": str(file_path)}
            )

        return file_path

    async def fetch_data(self, region_id: str) -> List[Dict[str, Any]]:
        """
        Read the catalog of a region.

        Returns:
            Ordered list of raw station records (not yet validated)
        """
        file_path = self.resolve_path(region_id)
        logger.info(f"Reading stations for {region_id} from {file_path}")

        data = read_json_document(file_path)

        if not isinstance(data, dict) or not isinstance(data.get("content"), list):
            raise MalformedSourceError(
                "Invalid JSON structure - expected {content: [...]}",
                context={"file_path": str(file_path), "expected": "{content: [...]}"}
            )

        records = data["content"]
        logger.info(f"Found {len(records)} stations")
        return records
