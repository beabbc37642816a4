"""
Application configuration using Pydantic Settings
"""

from pathlib import Path
from typing import List

from pydantic import BaseModel
from pydantic_settings import BaseSettings

# Install directory of the application; data and database live beside it
BASE_DIR = Path(__file__).resolve().parent.parent


class RegionSource(BaseModel):
    """A configured region and the catalog file that backs it"""
    name: str
    file: str


DEFAULT_REGIONS: List[RegionSource] = [
    RegionSource(name="santa-catarina", file="infoEstacoesFluvSC.json"),
    RegionSource(name="rio-grande-do-sul", file="infoEstacoesFluvRS.json"),
]


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Database
    DATABASE_PATH: Path = BASE_DIR / "db" / "hydro.db"
    SQLITE_CACHE_SIZE_KB: int = 64000
    SQL_ECHO: bool = False

    # Source data
    DATA_ROOT: Path = BASE_DIR / "data"
    STATIONS_SUBDIR: str = "metadados-estacoes"
    STREAMFLOW_SUBDIR: str = "dados-vazoes"
    REGIONS: List[RegionSource] = DEFAULT_REGIONS

    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
