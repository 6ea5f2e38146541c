"""
Dashboard - resumen del cuaderno
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from cuaderno_campo.api.deps import get_estado
from cuaderno_campo.services.cuaderno.estado import EstadoLocal
from cuaderno_campo.services.cuaderno.resumen_service import build_resumen

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


class ResumenResponse(BaseModel):
    parcelas_totales: int
    superficie_total: float
    cultivos_totales: int
    superficie_cultivada: float
    ingresos_totales: float
    gastos_totales: float
    balance: float
    trabajos_pendientes: int
    facturas_pendientes_pago: int


@router.get("/resumen", response_model=ResumenResponse)
def get_resumen(estado: EstadoLocal = Depends(get_estado)):
    return build_resumen(estado)
