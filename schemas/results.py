"""
Pydantic schemas for import results and summaries
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any


class RegionResult(BaseModel):
    """
    Outcome of importing one region's station catalog.

    success=False means the region failed fatally (unknown region, missing
    or malformed source); imported/errors are then unset.
    """
    success: bool
    region: str
    imported: Optional[int] = None
    errors: Optional[int] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return self.dict(exclude_none=True)


class ImportSummary(BaseModel):
    """Aggregate of every configured region's station import"""
    success: bool = True
    imported: int = 0
    errors: int = 0
    total: int = 0
    regions: List[RegionResult] = Field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return self.dict(exclude_none=True)


class StreamflowFileResult(BaseModel):
    """
    Outcome of importing one station's streamflow file.

    skipped marks a file whose station is not in the catalog; any other
    success=False means the file itself could not be read.
    """
    success: bool
    station_id: str
    daily_records: int = 0
    monthly_records: int = 0
    errors: int = 0
    skipped: bool = False
    error: Optional[str] = None

    @property
    def imported(self) -> int:
        return self.daily_records + self.monthly_records


class StreamflowRegionResult(BaseModel):
    """Outcome of importing every streamflow file of one region"""
    success: bool
    region: str
    files: int = 0
    daily_records: int = 0
    monthly_records: int = 0
    errors: int = 0
    skipped: int = 0
    failed: int = 0
    error: Optional[str] = None

    @property
    def imported(self) -> int:
        return self.daily_records + self.monthly_records

    def to_dict(self) -> Dict[str, Any]:
        return self.dict(exclude_none=True)


class StreamflowSummary(BaseModel):
    """Aggregate of every configured region's streamflow import"""
    success: bool = True
    imported: int = 0
    errors: int = 0
    skipped: int = 0
    failed: int = 0
    daily_total: int = 0
    monthly_total: int = 0
    regions: List[StreamflowRegionResult] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return self.daily_total + self.monthly_total

    def to_dict(self) -> Dict[str, Any]:
        data = self.dict(exclude_none=True)
        data["total"] = self.total
        return data
