"""Trabajos programados"""
from fastapi import APIRouter

from cuaderno_campo.api.v1.endpoints.common import build_crud_router
from cuaderno_campo.schemas.trabajo import TrabajoCreate, TrabajoResponse
from cuaderno_campo.services.cuaderno.entidades import Entidad

router = APIRouter(prefix="/trabajos", tags=["trabajos"])
router.include_router(
    build_crud_router(Entidad.TRABAJOS, TrabajoCreate, TrabajoResponse, "Trabajo no encontrado")
)
