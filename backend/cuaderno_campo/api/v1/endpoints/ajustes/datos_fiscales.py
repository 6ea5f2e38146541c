"""Datos fiscales del titular (fila única)"""
from typing import Optional

from fastapi import APIRouter, Depends
from supabase import Client

from cuaderno_campo.api.deps import get_client, get_config, get_estado
from cuaderno_campo.api.v1.endpoints.common import saved_response
from cuaderno_campo.schemas.base import RegistroGuardadoResponse
from cuaderno_campo.schemas.datos_fiscales import DatosFiscalesResponse, DatosFiscalesUpdate
from cuaderno_campo.services.cuaderno.datos_fiscales_service import save_datos_fiscales
from cuaderno_campo.services.cuaderno.entidades import CuadernoConfig
from cuaderno_campo.services.cuaderno.estado import EstadoLocal

router = APIRouter()


@router.get("/datos-fiscales", response_model=Optional[DatosFiscalesResponse])
def get_datos_fiscales(estado: EstadoLocal = Depends(get_estado)):
    """None mientras no se hayan configurado"""
    return estado.datos_fiscales


@router.put("/datos-fiscales", response_model=RegistroGuardadoResponse)
def put_datos_fiscales(
    data: DatosFiscalesUpdate,
    client: Client = Depends(get_client),
    config: CuadernoConfig = Depends(get_config),
    estado: EstadoLocal = Depends(get_estado),
):
    return saved_response(save_datos_fiscales(client, config, estado, data.to_registro()))
