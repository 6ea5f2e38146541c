from pydantic import Field
from typing import Optional

from cuaderno_campo.schemas.base import CamelModel


class ParcelaBase(CamelModel):
    nombre: str
    ubicacion: str
    superficie: float = Field(..., ge=0, description="Superficie en hectáreas")
    referencia_catastral: Optional[str] = None
    coordenadas: Optional[str] = Field(None, description="Formato 'latitud,longitud'")
    notas: Optional[str] = None


class ParcelaCreate(ParcelaBase):
    pass


class ParcelaResponse(ParcelaBase):
    id: str
