"""
Integration tests for store lifecycle, schema and referential integrity
"""

import pytest
from datetime import date, datetime
from sqlalchemy import delete, select, func, text
from sqlalchemy.exc import IntegrityError

from core import database
from core.database import DatabaseManager, get_database_manager
from core.exceptions import NotInitializedError
from models.station import Station
from models.streamflow import DailyStreamflow, MonthlyStat


EXPECTED_INDEXES = {
    "idx_daily_streamflows_station_date",
    "idx_daily_streamflows_date",
    "idx_monthly_stats_station_year_month",
    "idx_stations_name",
    "idx_stations_basin",
    "idx_stations_state",
    "idx_stations_river",
}


async def _schema_objects(manager: DatabaseManager):
    async with manager.session() as session:
        result = await session.execute(
            text(
                "SELECT type, name FROM sqlite_master "
                "WHERE name NOT LIKE 'sqlite_%' ORDER BY type, name"
            )
        )
        return [tuple(row) for row in result.all()]


async def _add_station(session, station_id: str = "86100000"):
    session.add(Station(id=station_id, name="PASSO DO GABRIEL", type="Fluviometrica"))
    await session.commit()


class TestLifecycle:
    """Test initialize / get / close / is_initialized"""

    @pytest.mark.asyncio
    async def test_get_before_initialize_fails(self, tmp_path):
        manager = DatabaseManager(tmp_path / "store.db")

        assert not manager.is_initialized()
        with pytest.raises(NotInitializedError):
            manager.get()
        with pytest.raises(NotInitializedError):
            manager.session()

    @pytest.mark.asyncio
    async def test_initialize_is_idempotent(self, tmp_path):
        manager = DatabaseManager(tmp_path / "store.db")

        first = await manager.initialize()
        second = await manager.initialize()

        assert first is second
        assert manager.get() is first
        assert manager.is_initialized()

        await manager.close()

    @pytest.mark.asyncio
    async def test_creates_missing_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "store.db"
        manager = DatabaseManager(path)

        await manager.initialize()
        await manager.close()

        assert path.exists()

    @pytest.mark.asyncio
    async def test_close_resets_state_and_is_safe_twice(self, tmp_path):
        manager = DatabaseManager(tmp_path / "store.db")
        await manager.initialize()

        await manager.close()
        await manager.close()

        assert not manager.is_initialized()
        with pytest.raises(NotInitializedError):
            manager.get()

    @pytest.mark.asyncio
    async def test_reinitialize_after_close_keeps_data(self, tmp_path):
        manager = DatabaseManager(tmp_path / "store.db")
        await manager.initialize()
        async with manager.session() as session:
            await _add_station(session)
        await manager.close()

        await manager.initialize()
        assert await manager.count_stations() == 1
        await manager.close()

    def test_process_wide_manager_is_shared(self, monkeypatch):
        monkeypatch.setattr(database, "_database_manager", None)

        first = get_database_manager()
        second = get_database_manager()

        assert first is second
        assert not first.is_initialized()


class TestSchema:
    """Test schema creation and connection configuration"""

    @pytest.mark.asyncio
    async def test_tables_and_indexes_exist(self, db_manager):
        objects = await _schema_objects(db_manager)
        tables = {name for kind, name in objects if kind == "table"}
        indexes = {name for kind, name in objects if kind == "index"}

        assert tables == {"stations", "daily_streamflows", "monthly_stats"}
        assert EXPECTED_INDEXES <= indexes

    @pytest.mark.asyncio
    async def test_repeated_initialization_does_not_duplicate(self, tmp_path):
        path = tmp_path / "store.db"

        first = DatabaseManager(path)
        await first.initialize()
        before = await _schema_objects(first)
        await first.close()

        second = DatabaseManager(path)
        await second.initialize()
        after = await _schema_objects(second)
        await second.close()

        assert before == after
        assert len(after) == len(set(after))

    @pytest.mark.asyncio
    async def test_connection_pragmas(self, db_session):
        foreign_keys = (await db_session.execute(text("PRAGMA foreign_keys"))).scalar_one()
        journal_mode = (await db_session.execute(text("PRAGMA journal_mode"))).scalar_one()
        cache_size = (await db_session.execute(text("PRAGMA cache_size"))).scalar_one()

        assert foreign_keys == 1
        assert journal_mode.lower() == "wal"
        assert cache_size == -64000

    @pytest.mark.asyncio
    async def test_created_at_set_by_store(self, db_manager):
        async with db_manager.session() as session:
            await _add_station(session)

        async with db_manager.session() as session:
            station = await session.get(Station, "86100000")

        assert isinstance(station.created_at, datetime)


class TestReferentialIntegrity:
    """Test foreign keys, cascades and uniqueness"""

    @pytest.mark.asyncio
    async def test_delete_station_cascades(self, db_manager):
        async with db_manager.session() as session:
            await _add_station(session)
            session.add(DailyStreamflow(station_id="86100000", date=date(2020, 1, 1), flow_rate=10.0))
            session.add(MonthlyStat(station_id="86100000", year=2020, month=1, valid_days=1))
            await session.commit()

        async with db_manager.session() as session:
            await session.execute(delete(Station).where(Station.id == "86100000"))
            await session.commit()

        async with db_manager.session() as session:
            daily = await session.execute(select(func.count()).select_from(DailyStreamflow))
            monthly = await session.execute(select(func.count()).select_from(MonthlyStat))

            assert daily.scalar_one() == 0
            assert monthly.scalar_one() == 0

    @pytest.mark.asyncio
    async def test_streamflow_requires_existing_station(self, db_session):
        db_session.add(DailyStreamflow(station_id="missing", date=date(2020, 1, 1), flow_rate=1.0))

        with pytest.raises(IntegrityError):
            await db_session.commit()

    @pytest.mark.asyncio
    async def test_monthly_stat_requires_existing_station(self, db_session):
        db_session.add(MonthlyStat(station_id="missing", year=2020, month=1, valid_days=0))

        with pytest.raises(IntegrityError):
            await db_session.commit()

    @pytest.mark.asyncio
    async def test_duplicate_daily_streamflow_rejected(self, db_manager):
        async with db_manager.session() as session:
            await _add_station(session)
            session.add(DailyStreamflow(station_id="86100000", date=date(2020, 1, 1), flow_rate=1.0))
            await session.commit()

        async with db_manager.session() as session:
            session.add(DailyStreamflow(station_id="86100000", date=date(2020, 1, 1), flow_rate=2.0))
            with pytest.raises(IntegrityError):
                await session.commit()

        async with db_manager.session() as session:
            rows = (await session.execute(select(DailyStreamflow))).scalars().all()

        assert len(rows) == 1
        assert rows[0].flow_rate == 1.0

    @pytest.mark.asyncio
    async def test_duplicate_monthly_stat_rejected(self, db_manager):
        async with db_manager.session() as session:
            await _add_station(session)
            session.add(MonthlyStat(station_id="86100000", year=2020, month=1, valid_days=31))
            await session.commit()

        async with db_manager.session() as session:
            session.add(MonthlyStat(station_id="86100000", year=2020, month=1, valid_days=30))
            with pytest.raises(IntegrityError):
                await session.commit()
