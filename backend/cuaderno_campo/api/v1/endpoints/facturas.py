"""Facturas emitidas y recibidas (el total se recalcula siempre en el esquema)"""
from fastapi import APIRouter

from cuaderno_campo.api.v1.endpoints.common import build_crud_router
from cuaderno_campo.schemas.factura import FacturaCreate, FacturaResponse
from cuaderno_campo.services.cuaderno.entidades import Entidad

router = APIRouter(prefix="/facturas", tags=["facturas"])
router.include_router(
    build_crud_router(Entidad.FACTURAS, FacturaCreate, FacturaResponse, "Factura no encontrada")
)
