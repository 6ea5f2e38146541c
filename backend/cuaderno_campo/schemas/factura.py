import enum
from datetime import date
from typing import Optional

from pydantic import Field, model_validator

from cuaderno_campo.schemas.base import CamelModel


class TipoFactura(str, enum.Enum):
    EMITIDA = "emitida"
    RECIBIDA = "recibida"


def calcular_total_factura(base_imponible: float, iva_porcentaje: float) -> float:
    """Total = base + cuota de IVA."""
    base = base_imponible or 0
    return base + base * (iva_porcentaje or 0) / 100


class FacturaBase(CamelModel):
    numero_factura: str
    fecha: date
    tipo: TipoFactura
    cliente_proveedor: str
    cliente_proveedor_nif: Optional[str] = None
    cliente_proveedor_direccion: Optional[str] = None
    descripcion: str
    base_imponible: float
    iva_porcentaje: float = 21
    total_factura: float = Field(0, description="Calculado: nunca se edita a mano")
    pagada: bool = False
    notas: Optional[str] = None

    @model_validator(mode="after")
    def recalcular_total(self) -> "FacturaBase":
        self.total_factura = calcular_total_factura(self.base_imponible, self.iva_porcentaje)
        return self


class FacturaCreate(FacturaBase):
    pass


class FacturaResponse(FacturaBase):
    id: str
