"""Verificación de conexión y recarga de datos"""
from typing import Callable

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel
from supabase import Client

from cuaderno_campo.api.deps import get_client_factory, get_config
from cuaderno_campo.services.cuaderno.carga_service import load_into_app_state
from cuaderno_campo.services.cuaderno.conexion_service import verify_connection
from cuaderno_campo.services.cuaderno.entidades import CuadernoConfig

router = APIRouter()


class ConexionResponse(BaseModel):
    success: bool
    message: str


@router.post("/verificar-conexion", response_model=ConexionResponse)
def verificar_conexion(
    request: Request,
    config: CuadernoConfig = Depends(get_config),
    client_factory: Callable[[], Client] = Depends(get_client_factory),
):
    estado = getattr(request.app.state, "estado", None)
    return verify_connection(client_factory, config, estado)


@router.post("/recargar")
def recargar(
    request: Request,
    config: CuadernoConfig = Depends(get_config),
    client_factory: Callable[[], Client] = Depends(get_client_factory),
):
    """Vuelve a leer todas las tablas (por ejemplo tras un error de conexión al arrancar)"""
    if not load_into_app_state(request.app.state, client_factory, config):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=request.app.state.error_carga
        )
    return {"message": "Datos recargados"}
