"""Verificación de conexión con Supabase"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from cuaderno_campo.services.cuaderno.entidades import CuadernoConfig
from cuaderno_campo.services.cuaderno.estado import EstadoLocal
from cuaderno_campo.services.supabase_client import classify_supabase_error

logger = logging.getLogger(__name__)


@dataclass
class ResultadoConexion:
    success: bool
    message: str


def verify_connection(
    get_client, config: CuadernoConfig, estado: Optional[EstadoLocal] = None
) -> ResultadoConexion:
    """Consulta de sólo recuento (cero filas) contra la tabla de referencia."""
    try:
        client = get_client()
        client.table(config.health_check_table).select("id", count="exact", head=True).execute()
    except Exception as e:
        message = classify_supabase_error(e).message
        logger.error(f"Supabase connection check failed: {message}")
        if estado is not None:
            estado.conectado = False
        return ResultadoConexion(False, f"Error de conexión: {message}")

    if estado is not None:
        estado.conectado = True
    return ResultadoConexion(True, "¡Conexión exitosa con la base de datos!")
