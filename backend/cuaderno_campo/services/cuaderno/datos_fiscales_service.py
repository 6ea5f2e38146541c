"""Datos fiscales: fila única guardada siempre bajo el mismo id"""
from __future__ import annotations

import logging
from typing import Any, Dict

from supabase import Client

from cuaderno_campo.services.cuaderno.entidades import CuadernoConfig, Entidad
from cuaderno_campo.services.cuaderno.estado import EstadoLocal
from cuaderno_campo.services.cuaderno.repositorio import ResultadoEscritura
from cuaderno_campo.services.supabase_client import RLS_HINT, supabase_errors
from cuaderno_campo.utils.casing import camel_keys, snake_keys

logger = logging.getLogger(__name__)

CAMPOS_CONTACTO_OPCIONALES = ("email", "telefono")


def build_payload(datos: Dict[str, Any], datos_fiscales_id: str) -> Dict[str, Any]:
    """Fija el id reservado; los contactos vacíos se guardan como NULL, nunca como ''."""
    payload = {k: v for k, v in datos.items() if k != "id"}
    payload["id"] = datos_fiscales_id
    for campo in CAMPOS_CONTACTO_OPCIONALES:
        payload[campo] = payload.get(campo) or None
    return payload


def save_datos_fiscales(
    client: Client, config: CuadernoConfig, estado: EstadoLocal, datos: Dict[str, Any]
) -> ResultadoEscritura:
    table = config.table(Entidad.DATOS_FISCALES)
    payload = build_payload(datos, config.datos_fiscales_id)

    with supabase_errors("guardar datos fiscales", table):
        response = client.table(table).upsert(snake_keys(payload)).execute()

    rows = response.data or []
    if not rows:
        logger.warning("Upsert de datos fiscales sin filas devueltas")
        estado.set_datos_fiscales(payload)
        return ResultadoEscritura(
            payload, f"Error: Los datos se guardaron, pero no se pudieron recuperar. {RLS_HINT}"
        )

    guardado = camel_keys(rows[0])
    estado.set_datos_fiscales(guardado)
    return ResultadoEscritura(guardado)
