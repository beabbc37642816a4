"""
Transform raw source records into validated schemas
"""

import calendar
from typing import Dict, Any, Optional, List
from datetime import date, datetime
from pydantic import ValidationError as PydanticValidationError

from core.exceptions import RecordValidationError
from schemas.station import StationCreate
from schemas.streamflow import DailyStreamflowCreate, MonthlyStatCreate, StreamflowMonth
import logging

logger = logging.getLogger(__name__)


def _field_errors(error: PydanticValidationError) -> List[str]:
    return [
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
        for err in error.errors()
    ]


class StationNormalizer:
    """
    Validate catalog records into StationCreate.

    A record is valid only with a non-empty id, nome and tipoEstacao.
    """

    def normalize(self, raw_record: Any) -> StationCreate:
        if not isinstance(raw_record, dict):
            raise RecordValidationError(
                "Station record is not an object",
                context={"record_type": type(raw_record).__name__}
            )

        try:
            return StationCreate(**raw_record)
        except PydanticValidationError as e:
            raise RecordValidationError(
                "Station record failed validation",
                context={
                    "record_id": raw_record.get("id"),
                    "field_errors": _field_errors(e)
                },
                original_exception=e
            )


class StreamflowNormalizer:
    """
    Expand a monthly streamflow record into daily rows and a monthly aggregate.

    Source fields:
    - Data_Hora_Dado -> year/month of the record
    - Vazao_NN / Vazao_NN_Status -> daily flow_rate / status
    - Nivel_Consistencia -> consistency_level of every day
    - Media / Maxima / Minima -> monthly_avg / monthly_max / monthly_min
    """

    def __init__(self, station_id: str):
        self.station_id = station_id

    def normalize(self, raw_record: Any) -> StreamflowMonth:
        if not isinstance(raw_record, dict):
            raise RecordValidationError(
                "Streamflow record is not an object",
                context={"station_id": self.station_id}
            )

        month_start = self._parse_month(raw_record.get("Data_Hora_Dado"))
        if month_start is None:
            raise RecordValidationError(
                "Streamflow record has no valid Data_Hora_Dado",
                context={
                    "station_id": self.station_id,
                    "field_value": raw_record.get("Data_Hora_Dado")
                }
            )

        year, month = month_start.year, month_start.month
        days_in_month = calendar.monthrange(year, month)[1]
        consistency_level = self._parse_int(raw_record.get("Nivel_Consistencia"))

        try:
            daily = []
            valid_days = 0
            for day in range(1, days_in_month + 1):
                flow_key = f"Vazao_{day:02d}"
                flow_rate = self._parse_float(raw_record.get(flow_key))

                if flow_rate is not None and flow_rate != 0:
                    valid_days += 1

                daily.append(DailyStreamflowCreate(
                    station_id=self.station_id,
                    date=date(year, month, day),
                    flow_rate=flow_rate,
                    status=self._parse_int(raw_record.get(f"{flow_key}_Status")),
                    consistency_level=consistency_level,
                ))

            monthly = MonthlyStatCreate(
                station_id=self.station_id,
                year=year,
                month=month,
                monthly_avg=self._parse_float(raw_record.get("Media")),
                monthly_max=self._parse_float(raw_record.get("Maxima")),
                monthly_min=self._parse_float(raw_record.get("Minima")),
                valid_days=valid_days,
            )
        except PydanticValidationError as e:
            raise RecordValidationError(
                "Streamflow record failed validation",
                context={
                    "station_id": self.station_id,
                    "field_errors": _field_errors(e)
                },
                original_exception=e
            )

        return StreamflowMonth(station_id=self.station_id, daily=daily, monthly=monthly)

    @staticmethod
    def _parse_month(value: Any) -> Optional[date]:
        """Parse the date part of values like '1977-04-01 00:00:00.0'"""
        if value is None or value == "":
            return None
        if isinstance(value, datetime):
            return value.date()
        try:
            return datetime.strptime(str(value).strip()[:10], "%Y-%m-%d").date()
        except ValueError:
            return None

    @staticmethod
    def _parse_float(value: Any) -> Optional[float]:
        """Safely parse float value"""
        if value is None or value == "":
            return None
        try:
            return float(str(value).replace(",", "."))
        except (ValueError, TypeError):
            return None

    @staticmethod
    def _parse_int(value: Any) -> Optional[int]:
        """Safely parse int value"""
        if value is None or value == "":
            return None
        try:
            return int(float(value))  # Handle "1.0" strings
        except (ValueError, TypeError):
            return None
