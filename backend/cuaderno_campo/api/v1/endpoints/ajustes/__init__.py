"""Ajustes Module - Router aggregation"""
from fastapi import APIRouter

from .datos_fiscales import router as datos_fiscales_router
from .backup import router as backup_router
from .conexion import router as conexion_router

router = APIRouter(prefix="/ajustes", tags=["ajustes"])

router.include_router(datos_fiscales_router)
router.include_router(backup_router)
router.include_router(conexion_router)
