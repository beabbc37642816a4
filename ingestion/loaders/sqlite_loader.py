"""
Load validated records into SQLite with upsert logic (idempotency)
"""

from typing import Any, Callable, Iterable, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.sql import Executable

from core.exceptions import DatabaseError, RecordValidationError, UpsertError
from ingestion.base import LoadResult, RecordOutcome
from models.station import Station
from models.streamflow import DailyStreamflow, MonthlyStat
from schemas.station import StationCreate
from schemas.streamflow import StreamflowMonth
import logging

logger = logging.getLogger(__name__)


def _upsert(model, row: dict, conflict_columns: List[str]) -> Executable:
    """INSERT ... ON CONFLICT DO UPDATE overwriting every non-key column"""
    stmt = insert(model).values(**row)
    return stmt.on_conflict_do_update(
        index_elements=conflict_columns,
        set_={
            column: stmt.excluded[column]
            for column in row
            if column not in conflict_columns
        }
    )


def station_upsert_statements(station: StationCreate) -> List[Executable]:
    """Upsert keyed on id; created_at keeps its first-insert value"""
    return [_upsert(Station, station.to_row(), ["id"])]


def streamflow_upsert_statements(month: StreamflowMonth) -> List[Executable]:
    """Upsert every daily row of the month plus its monthly aggregate"""
    statements = [
        _upsert(DailyStreamflow, day.to_row(), ["station_id", "date"])
        for day in month.daily
    ]
    statements.append(
        _upsert(MonthlyStat, month.monthly.to_row(), ["station_id", "year", "month"])
    )
    return statements


def _default_record_id(record: Any) -> Optional[str]:
    if isinstance(record, dict) and record.get("id") is not None:
        return str(record.get("id"))
    return None


class SQLiteLoader:
    """
    Bulk upsert with per-record accounting inside one transaction.

    Ensures:
    - The whole batch commits atomically
    - A record that fails validation is counted and never written
    - A record whose write fails is rolled back to its savepoint and counted,
      without aborting the batch
    """

    def __init__(self, db_session: AsyncSession, table_name: str = "stations"):
        self.db = db_session
        self.table_name = table_name

    async def load(
        self,
        records: Iterable[Any],
        transform: Callable[[Any], Any],
        statements: Callable[[Any], List[Executable]],
        record_id: Callable[[Any], Optional[str]] = _default_record_id
    ) -> LoadResult:
        """
        Transform and upsert every record.

        Args:
            records: Raw source records
            transform: Validates a raw record, raising RecordValidationError
            statements: Builds the write statements for a validated record
            record_id: Extracts an identifier used in error reporting

        Returns:
            LoadResult with success and failure counts
        """
        result = LoadResult()

        try:
            async with self.db.begin():
                for record in records:
                    outcome = await self._load_record(record, transform, statements, record_id)
                    result.apply(outcome)
        except SQLAlchemyError as e:
            raise DatabaseError(
                "Failed to commit bulk upsert",
                context={
                    "operation": "UPSERT",
                    "table_name": self.table_name,
                    "records_attempted": result.total
                },
                original_exception=e
            )

        logger.info(
            f"Loaded {result.successes} records into {self.table_name} "
            f"({result.failures} failed)"
        )
        return result

    async def _load_record(
        self,
        record: Any,
        transform: Callable[[Any], Any],
        statements: Callable[[Any], List[Executable]],
        record_id: Callable[[Any], Optional[str]]
    ) -> RecordOutcome:
        rid = record_id(record)

        try:
            item = transform(record)
        except RecordValidationError as e:
            logger.debug(f"Skipping invalid record {rid}: {e.message}")
            return RecordOutcome.failure(rid, e)

        stmts = statements(item)
        try:
            async with self.db.begin_nested():
                for stmt in stmts:
                    await self.db.execute(stmt)
        except SQLAlchemyError as e:
            error = UpsertError(
                "Failed to upsert record",
                context={"record_id": rid, "table_name": self.table_name},
                original_exception=e
            )
            logger.warning(
                f"Upsert failed for record {rid}: {e}",
                extra={"error_context": error.to_dict()}
            )
            return RecordOutcome.failure(rid, error)

        return RecordOutcome.success(rid, rows=len(stmts))
