"""
Pytest configuration and fixtures
"""

import json
import pytest
import pytest_asyncio
from pathlib import Path
from typing import AsyncGenerator, Callable, List, Dict, Any
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import RegionSource
from core.database import DatabaseManager


@pytest_asyncio.fixture(scope="function")
async def db_manager(tmp_path) -> AsyncGenerator[DatabaseManager, None]:
    """Isolated store on a temporary database file"""
    manager = DatabaseManager(tmp_path / "db" / "test.db")
    await manager.initialize()

    yield manager

    await manager.close()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_manager) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for tests"""
    async with db_manager.session() as session:
        yield session
        await session.rollback()


@pytest.fixture
def data_root(tmp_path) -> Path:
    root = tmp_path / "data"
    root.mkdir()
    return root


@pytest.fixture
def write_catalog(data_root) -> Callable[..., Path]:
    """Write a region catalog file: <data_root>/<region>/metadados-estacoes/<file>"""

    def _write(region: str, file_name: str, records: List[Dict[str, Any]]) -> Path:
        directory = data_root / region / "metadados-estacoes"
        directory.mkdir(parents=True, exist_ok=True)
        file_path = directory / file_name
        file_path.write_text(json.dumps({"content": records}), encoding="utf-8")
        return file_path

    return _write


@pytest.fixture
def write_streamflow(data_root) -> Callable[..., Path]:
    """Write a station streamflow file: <data_root>/<region>/dados-vazoes/<station>.json"""

    def _write(region: str, station_id: str, items: List[Dict[str, Any]]) -> Path:
        directory = data_root / region / "dados-vazoes"
        directory.mkdir(parents=True, exist_ok=True)
        file_path = directory / f"{station_id}.json"
        file_path.write_text(
            json.dumps({"codigo_estacao": station_id, "items": items}),
            encoding="utf-8"
        )
        return file_path

    return _write


@pytest.fixture
def rs_regions() -> List[RegionSource]:
    return [RegionSource(name="rs", file="infoEstacoesFluvRS.json")]


@pytest.fixture
def mock_station_records() -> List[Dict[str, Any]]:
    """Catalog records as published in a region file; the last one has no name"""
    return [
        {
            "id": "86100000",
            "nome": "PASSO DO GABRIEL",
            "tipoEstacao": "Fluviometrica",
            "codigoAdicional": "",
            "codigoNomeBacia": "8 - ATLANTICO, TRECHO SUDESTE",
            "codigoNomeSubBacia": "86 - RIO TAQUARI",
            "nomeRio": "RIO DAS ANTAS",
            "nomeEstado": "RIO GRANDE DO SUL",
            "nomeMunicipio": "BOM JESUS",
            "responsavelSigla": "ANA",
            "operadoraSigla": "CPRM",
            "areaDrenagem": 2290.0,
            "latitude": -28.7344,
            "longitude": -50.4214,
            "altitude": 700.0
        },
        {
            "id": "86160000",
            "nome": "PASSO CARREIRO",
            "tipoEstacao": "Fluviometrica",
            "nomeRio": "RIO CARREIRO",
            "nomeEstado": "RIO GRANDE DO SUL",
            "latitude": -28.8136,
            "longitude": -51.8094
        },
        {
            "id": "86180000",
            "nome": "",
            "tipoEstacao": "Fluviometrica",
            "nomeRio": "RIO GUAPORE"
        }
    ]


def make_month(month_date: str, flows: Dict[int, Any], consistency: str = "1") -> Dict[str, Any]:
    """Monthly streamflow record with the given daily flows (day -> value)"""
    record = {
        "Data_Hora_Dado": month_date,
        "Nivel_Consistencia": consistency,
        "Media": "12.5",
        "Maxima": "40.0",
        "Minima": "1.5",
    }
    for day in range(1, 32):
        key = f"Vazao_{day:02d}"
        record[key] = flows.get(day)
        record[f"{key}_Status"] = "1" if flows.get(day) is not None else None
    return record


@pytest.fixture
def mock_streamflow_items() -> List[Dict[str, Any]]:
    """Two months: January 2020 fully measured, February 2020 with gaps"""
    january = make_month(
        "2020-01-01 00:00:00.0",
        {day: f"{10 + day}.5" for day in range(1, 32)}
    )
    february = make_month(
        "2020-02-01 00:00:00.0",
        {1: "8.0", 2: "0.0", 3: None, 4: "7.25"}
    )
    return [january, february]
