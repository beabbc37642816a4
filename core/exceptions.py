"""
Custom exceptions for the hydrological store and import pipeline.

Every exception carries structured context so that failures can be logged
and reported without losing the region, file or record that caused them.

Exception Hierarchy:
    HydroException (base)
    ├── StoreError
    │   ├── NotInitializedError
    │   └── DatabaseError
    ├── SourceError (fatal to one region's import)
    │   ├── UnknownRegionError
    │   ├── SourceNotFoundError
    │   └── MalformedSourceError
    └── RecordError (never fatal, counted)
        ├── RecordValidationError
        └── UpsertError
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone


class HydroException(Exception):
    """
    Base exception for all store and import errors.

    Attributes:
        message: Human-readable error message
        context: Additional context information (region, file path, record id, etc.)
        original_exception: The original exception that was caught (if any)
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now(timezone.utc)

        self.context["error_timestamp"] = self.timestamp.isoformat()

        super().__init__(message)
        if original_exception:
            self.__cause__ = original_exception

    def __str__(self) -> str:
        """Format error message with context."""
        base_msg = f"{self.__class__.__name__}: {self.message}"

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"

        if self.original_exception:
            base_msg += f" | Caused by: {type(self.original_exception).__name__}: {str(self.original_exception)}"

        return base_msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/storage."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "original_error": str(self.original_exception) if self.original_exception else None
        }


# ============================================================================
# Store Errors
# ============================================================================

class StoreError(HydroException):
    """Base exception for embedded database failures."""
    pass


class NotInitializedError(StoreError):
    """
    Raised when the store is used before initialize() or after close().

    This is a programming error; correct callers never see it.
    """
    pass


class DatabaseError(StoreError):
    """
    Exception raised when database operations fail.

    Context should include:
        - operation: Type of database operation (SELECT, UPSERT, CREATE)
        - table_name: Name of the table
        - database_path: Location of the database file
    """
    pass


# ============================================================================
# Source Errors (fatal to a single region)
# ============================================================================

class SourceError(HydroException):
    """Base exception for region source resolution and parsing failures."""
    pass


class UnknownRegionError(SourceError):
    """
    Raised when a region id has no configured source file.

    Context should include:
        - region: The requested region id
        - configured_regions: Region ids that are configured
    """
    pass


class SourceNotFoundError(SourceError):
    """
    Raised when a region's source file or directory does not exist.

    Context should include:
        - region: Region id
        - file_path: Path that was resolved
    """
    pass


class MalformedSourceError(SourceError):
    """
    Raised when a source file is not valid JSON or lacks the expected structure.

    Context should include:
        - file_path: Path to the source file
        - expected: Description of the expected structure
    """
    pass


# ============================================================================
# Record Errors (never fatal)
# ============================================================================

class RecordError(HydroException):
    """Base exception for failures confined to a single record."""
    pass


class RecordValidationError(RecordError):
    """
    Raised when a record fails structural validation.

    Context should include:
        - record_id: Identifier of the record (if present)
        - field_errors: List of field-level errors
    """
    pass


class UpsertError(RecordError):
    """
    Raised when writing a single record fails.

    Context should include:
        - record_id: Identifier of the record being upserted
        - table_name: Target table
    """
    pass
