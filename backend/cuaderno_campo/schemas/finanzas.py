import enum
from datetime import date
from typing import Optional

from cuaderno_campo.schemas.base import CamelModel


class TipoRegistroFinanciero(str, enum.Enum):
    INGRESO = "ingreso"
    GASTO = "gasto"


class RegistroFinancieroBase(CamelModel):
    tipo: TipoRegistroFinanciero
    fecha: date
    concepto: str
    cantidad: float
    categoria: Optional[str] = None
    notas: Optional[str] = None


class RegistroFinancieroCreate(RegistroFinancieroBase):
    pass


class RegistroFinancieroResponse(RegistroFinancieroBase):
    id: str
