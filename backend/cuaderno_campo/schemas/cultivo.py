from pydantic import Field
from typing import Optional

from cuaderno_campo.schemas.base import CamelModel


class CultivoBase(CamelModel):
    parcela_id: str
    nombre_cultivo: str
    variedad: Optional[str] = None
    superficie_cultivada: float = Field(..., ge=0, description="Superficie cultivada en hectáreas")
    notas: Optional[str] = None


class CultivoCreate(CultivoBase):
    pass


class CultivoResponse(CultivoBase):
    id: str
