"""Carga inicial: las seis tablas se piden a la vez y se espera a todas"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

from supabase import Client

from cuaderno_campo.services.cuaderno.entidades import COLECCIONES, CuadernoConfig, Entidad
from cuaderno_campo.services.cuaderno.estado import EstadoLocal
from cuaderno_campo.services.supabase_client import (
    STORE_EXCEPTIONS,
    SupabaseNotConfigured,
    classify_supabase_error,
)
from cuaderno_campo.utils.casing import camel_keys

logger = logging.getLogger(__name__)

# PostgREST: .single() sin filas
NO_ROWS_CODE = "PGRST116"


class ErrorCargaInicial(RuntimeError):
    """Supabase no es accesible o las tablas no están bien configuradas."""


def _fetch_collection(client: Client, table: str) -> List[Dict[str, Any]]:
    response = client.table(table).select("*").execute()
    return [camel_keys(row) for row in (response.data or []) if row]


def _fetch_datos_fiscales(client: Client, table: str) -> Optional[Dict[str, Any]]:
    try:
        response = client.table(table).select("*").limit(1).single().execute()
    except STORE_EXCEPTIONS as exc:
        if getattr(exc, "code", None) == NO_ROWS_CODE:
            # Datos fiscales todavía sin configurar
            return None
        raise
    return camel_keys(response.data) if response.data else None


def load_all(client: Client, config: CuadernoConfig) -> EstadoLocal:
    logger.info("Carga inicial de %d tablas", len(config.entities))
    with ThreadPoolExecutor(max_workers=config.load_workers) as pool:
        futures = {
            entidad: pool.submit(_fetch_collection, client, config.table(entidad))
            for entidad in COLECCIONES
        }
        fiscal_future = pool.submit(_fetch_datos_fiscales, client, config.table(Entidad.DATOS_FISCALES))

    try:
        colecciones = {entidad: future.result() for entidad, future in futures.items()}
        datos_fiscales = fiscal_future.result()
    except STORE_EXCEPTIONS as exc:
        error = classify_supabase_error(exc)
        logger.error("Error cargando datos de Supabase: %s", error.message)
        raise ErrorCargaInicial(
            f"No se pudieron cargar los datos: {error.message}. Revise la conexión y la "
            "configuración de las tablas en Supabase."
        ) from exc

    logger.info(
        "Carga inicial completada: %s",
        ", ".join(f"{e.value}={len(r)}" for e, r in colecciones.items()),
    )
    return EstadoLocal(colecciones, datos_fiscales, conectado=True)


def load_initial_state(get_client, config: CuadernoConfig) -> EstadoLocal:
    """Como load_all, pero también convierte la falta de credenciales en ErrorCargaInicial."""
    try:
        client = get_client()
    except SupabaseNotConfigured as exc:
        logger.error("Supabase no configurado: %s", exc)
        raise ErrorCargaInicial(str(exc)) from exc
    return load_all(client, config)


def load_into_app_state(app_state, get_client, config: CuadernoConfig) -> bool:
    """Carga el estado en `app.state`; si falla deja el mensaje en `app.state.error_carga`."""
    try:
        estado = load_initial_state(get_client, config)
    except ErrorCargaInicial as exc:
        app_state.error_carga = str(exc)
        app_state.estado = None
        return False
    app_state.error_carga = None
    app_state.estado = estado
    return True
