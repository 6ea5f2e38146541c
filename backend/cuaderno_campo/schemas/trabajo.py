import enum
from datetime import date
from typing import Optional

from pydantic import Field

from cuaderno_campo.schemas.base import CamelModel


class EstadoTrabajo(str, enum.Enum):
    PENDIENTE = "pendiente"
    EN_PROGRESO = "en_progreso"
    COMPLETADO = "completado"


class TrabajoBase(CamelModel):
    # Un trabajo puede ser general, de una parcela o de un cultivo concreto.
    # No se comprueba que el cultivo pertenezca a la parcela indicada.
    parcela_id: Optional[str] = None
    cultivo_id: Optional[str] = None
    fecha_programada: date
    fecha_realizacion: Optional[date] = None
    descripcion_tarea: str
    responsable: Optional[str] = None
    estado: EstadoTrabajo = EstadoTrabajo.PENDIENTE
    coste_materiales: Optional[float] = Field(None, ge=0)
    horas_trabajo: Optional[float] = Field(None, ge=0)
    notas: Optional[str] = None


class TrabajoCreate(TrabajoBase):
    pass


class TrabajoResponse(TrabajoBase):
    id: str
