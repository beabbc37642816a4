"""
Pydantic schemas for station catalog records with structural validation
"""

from pydantic import BaseModel, Field, validator
from typing import Optional, Dict, Any


OPTIONAL_TEXT_FIELDS = (
    "additional_code",
    "basin_code",
    "sub_basin_code",
    "river_name",
    "state_name",
    "city_name",
    "responsible_sigla",
    "operator_sigla",
)


def parse_number(value: Any) -> Optional[float]:
    """Float value, or None when absent, blank or unparseable"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip().replace(",", "."))
    except ValueError:
        return None


class StationCreate(BaseModel):
    """
    One station record as published in a region catalog.

    Field names match the stations table; aliases match the catalog JSON.

    Ensures:
    - id, name and type are present and non-empty; id is stored as given
    - Absent or blank optional text becomes null
    - Numeric attributes are floats or null (no range checks, no rejection)
    """

    # Identity and mandatory attributes
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, alias="nome")
    type: str = Field(..., min_length=1, alias="tipoEstacao")

    # Optional descriptive attributes
    additional_code: Optional[str] = Field(None, alias="codigoAdicional")
    basin_code: Optional[str] = Field(None, alias="codigoNomeBacia")
    sub_basin_code: Optional[str] = Field(None, alias="codigoNomeSubBacia")
    river_name: Optional[str] = Field(None, alias="nomeRio")
    state_name: Optional[str] = Field(None, alias="nomeEstado")
    city_name: Optional[str] = Field(None, alias="nomeMunicipio")
    responsible_sigla: Optional[str] = Field(None, alias="responsavelSigla")
    operator_sigla: Optional[str] = Field(None, alias="operadoraSigla")

    # Numeric attributes
    drainage_area: Optional[float] = Field(None, alias="areaDrenagem")
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    altitude: Optional[float] = None

    @validator("id", "name", "type", pre=True)
    def require_text(cls, v):
        """Station codes sometimes arrive as numbers; text must not be blank"""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            v = str(v)
        if isinstance(v, str) and not v.strip():
            raise ValueError("must not be empty")
        return v

    @validator(*OPTIONAL_TEXT_FIELDS, pre=True)
    def blank_to_none(cls, v):
        if v is None:
            return None
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @validator("drainage_area", "latitude", "longitude", "altitude", pre=True)
    def lenient_number(cls, v):
        """Unparseable numbers are stored as null instead of rejecting the station"""
        return parse_number(v)

    def to_row(self) -> Dict[str, Any]:
        """Column values for the stations table"""
        return self.dict()

    class Config:
        # Only the catalog keys (nome, tipoEstacao, ...) populate fields
        extra = "ignore"
