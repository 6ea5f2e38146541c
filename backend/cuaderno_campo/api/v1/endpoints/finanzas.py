"""Registros financieros (ingresos y gastos)"""
from fastapi import APIRouter

from cuaderno_campo.api.v1.endpoints.common import build_crud_router
from cuaderno_campo.schemas.finanzas import (
    RegistroFinancieroCreate,
    RegistroFinancieroResponse,
    TipoRegistroFinanciero,
)
from cuaderno_campo.services.cuaderno.entidades import Entidad

CATEGORIAS_GASTO = [
    "Semillas y Plantones",
    "Fertilizantes y Abonos",
    "Fitosanitarios",
    "Combustible y Energía",
    "Maquinaria (Alquiler/Reparación)",
    "Mano de Obra",
    "Riego",
    "Administrativos",
    "Impuestos y Tasas",
    "Otros Gastos",
]

CATEGORIAS_INGRESO = [
    "Venta de Cosecha",
    "Subvenciones",
    "Alquiler de Maquinaria",
    "Servicios Agrícolas",
    "Otros Ingresos",
]

router = APIRouter(prefix="/finanzas", tags=["finanzas"])


@router.get("/categorias")
def get_categorias():
    """Catálogo de categorías sugeridas por tipo de registro"""
    return {
        TipoRegistroFinanciero.GASTO.value: CATEGORIAS_GASTO,
        TipoRegistroFinanciero.INGRESO.value: CATEGORIAS_INGRESO,
    }


router.include_router(
    build_crud_router(
        Entidad.REGISTROS_FINANCIEROS,
        RegistroFinancieroCreate,
        RegistroFinancieroResponse,
        "Registro financiero no encontrado",
    )
)
