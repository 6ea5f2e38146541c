"""Dependencias FastAPI comunes"""
from typing import Callable

from fastapi import HTTPException, Request, status
from supabase import Client

from cuaderno_campo.services.cuaderno.entidades import CuadernoConfig
from cuaderno_campo.services.cuaderno.estado import EstadoLocal
from cuaderno_campo.services.supabase_client import get_supabase_client


def get_config() -> CuadernoConfig:
    return CuadernoConfig.from_settings()


def get_client() -> Client:
    """Dependency to get the Supabase client (SupabaseNotConfigured -> 503)."""
    return get_supabase_client()


def get_client_factory() -> Callable[[], Client]:
    """Factoría sin invocar: la verificación de conexión informa de la falta de credenciales
    como fallo de conexión en lugar de 503."""
    return get_supabase_client


def get_estado(request: Request) -> EstadoLocal:
    """Estado local cargado al arrancar; si la carga falló, toda la API queda bloqueada."""
    error = getattr(request.app.state, "error_carga", None)
    if error:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=error)
    estado = getattr(request.app.state, "estado", None)
    if estado is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Los datos todavía no se han cargado.",
        )
    return estado
