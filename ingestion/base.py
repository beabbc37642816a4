"""
Per-record outcomes and the reducer that turns them into load statistics
"""

from typing import Any, Dict, Iterable, List, Optional

from core.exceptions import RecordError


class RecordOutcome:
    """
    Result of processing a single record.

    A success carries the record id and the number of rows it wrote; a
    failure carries the RecordError that stopped it.
    """

    __slots__ = ("record_id", "error", "rows")

    def __init__(
        self,
        record_id: Optional[str],
        error: Optional[RecordError] = None,
        rows: int = 0
    ):
        self.record_id = record_id
        self.error = error
        self.rows = rows

    @classmethod
    def success(cls, record_id: Optional[str], rows: int = 1) -> "RecordOutcome":
        return cls(record_id, rows=rows)

    @classmethod
    def failure(cls, record_id: Optional[str], error: RecordError) -> "RecordOutcome":
        return cls(record_id, error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def __repr__(self) -> str:
        status = "ok" if self.ok else type(self.error).__name__
        return f"<RecordOutcome {self.record_id!r} {status}>"


class LoadResult:
    """
    Accumulated (successes, failures) pair for one bulk load.

    error_details keeps the structured context of every failure so callers
    can report which records were rejected and why.
    """

    def __init__(self, successes: int = 0, failures: int = 0):
        self.successes = successes
        self.failures = failures
        self.rows_written = 0
        self.error_details: List[Dict[str, Any]] = []

    def apply(self, outcome: RecordOutcome) -> "LoadResult":
        if outcome.ok:
            self.successes += 1
            self.rows_written += outcome.rows
        else:
            self.failures += 1
            detail = outcome.error.to_dict()
            detail["record_id"] = outcome.record_id
            self.error_details.append(detail)
        return self

    @classmethod
    def reduce(cls, outcomes: Iterable[RecordOutcome]) -> "LoadResult":
        result = cls()
        for outcome in outcomes:
            result.apply(outcome)
        return result

    @property
    def total(self) -> int:
        return self.successes + self.failures

    def __repr__(self) -> str:
        return f"<LoadResult successes={self.successes} failures={self.failures}>"
