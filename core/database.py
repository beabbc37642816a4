"""
Embedded database lifecycle management with SQLAlchemy async over SQLite.

The store is an explicit context object: construct one DatabaseManager per
database file and pass it to every dependent. get_database_manager() hands out
the process-wide instance built from settings; tests build isolated instances
pointed at temporary files.
"""

from pathlib import Path
from typing import Optional, Union
import logging

from sqlalchemy import event, func, select
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
)
from sqlalchemy.pool import NullPool

from core.config import settings
from core.exceptions import NotInitializedError, DatabaseError
from models.base import Base
from models.station import Station

logger = logging.getLogger(__name__)


def _create_schema(connection) -> None:
    """Create every table and index that does not exist yet"""
    Base.metadata.create_all(connection, checkfirst=True)

    # create_all only emits indexes together with a new table
    for table in Base.metadata.sorted_tables:
        for index in table.indexes:
            index.create(connection, checkfirst=True)


class DatabaseManager:
    """
    Owns one embedded database file: engine, pragmas, schema and lifecycle.

    Lifecycle:
    - initialize() opens the engine and ensures the schema (idempotent)
    - get() / session() are valid only between initialize() and close()
    - close() disposes the engine and returns to the uninitialized state
    """

    def __init__(
        self,
        database_path: Optional[Union[str, Path]] = None,
        cache_size_kb: Optional[int] = None,
        echo: Optional[bool] = None
    ):
        self.database_path = Path(database_path or settings.DATABASE_PATH)
        self.cache_size_kb = cache_size_kb if cache_size_kb is not None else settings.SQLITE_CACHE_SIZE_KB
        self.echo = settings.SQL_ECHO if echo is None else echo

        self._engine: Optional[AsyncEngine] = None
        self._session_maker: Optional[async_sessionmaker] = None

    @property
    def database_url(self) -> str:
        return f"sqlite+aiosqlite:///{self.database_path}"

    async def initialize(self) -> AsyncEngine:
        """
        Open the database and make sure the schema exists.

        Returns the existing engine untouched when already initialized.
        """
        if self._engine is not None:
            return self._engine

        self.database_path.parent.mkdir(parents=True, exist_ok=True)

        engine = create_async_engine(
            self.database_url,
            echo=self.echo,
            poolclass=NullPool,
        )
        event.listen(engine.sync_engine, "connect", self._configure_connection)
        event.listen(engine.sync_engine, "begin", self._begin_transaction)

        try:
            async with engine.begin() as conn:
                await conn.run_sync(_create_schema)
        except Exception as e:
            await engine.dispose()
            raise DatabaseError(
                "Failed to initialize database schema",
                context={
                    "operation": "CREATE",
                    "database_path": str(self.database_path)
                },
                original_exception=e
            )

        self._engine = engine
        self._session_maker = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False
        )

        logger.info(f"Database initialized at: {self.database_path}")
        return engine

    def _configure_connection(self, dbapi_connection, connection_record) -> None:
        # Let SQLAlchemy emit BEGIN itself so SAVEPOINT works under the driver
        dbapi_connection.isolation_level = None

        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode = WAL")
        cursor.execute(f"PRAGMA cache_size = -{self.cache_size_kb}")
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    @staticmethod
    def _begin_transaction(conn) -> None:
        conn.exec_driver_sql("BEGIN")

    def get(self) -> AsyncEngine:
        """Return the engine, failing if initialize() has not been called"""
        if self._engine is None:
            raise NotInitializedError(
                "Database not initialized. Call initialize() first.",
                context={"database_path": str(self.database_path)}
            )
        return self._engine

    def session(self) -> AsyncSession:
        """Create a new session bound to the initialized engine"""
        self.get()
        return self._session_maker()

    async def close(self) -> None:
        """Release the engine; a no-op when already closed"""
        if self._engine is None:
            return

        await self._engine.dispose()
        self._engine = None
        self._session_maker = None
        logger.info("Database connection closed")

    def is_initialized(self) -> bool:
        return self._engine is not None

    async def count_stations(self) -> int:
        """Authoritative number of rows in the stations table"""
        async with self.session() as session:
            result = await session.execute(select(func.count()).select_from(Station))
            return result.scalar_one()


_database_manager: Optional[DatabaseManager] = None


def get_database_manager() -> DatabaseManager:
    """Return the process-wide DatabaseManager, creating it on first access"""
    global _database_manager
    if _database_manager is None:
        _database_manager = DatabaseManager()
    return _database_manager
