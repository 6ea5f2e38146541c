"""Cliente Supabase y clasificación de errores del almacén remoto"""
from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from functools import lru_cache
from typing import Any, Iterator, Mapping, Optional

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client

from cuaderno_campo.core.config import settings

logger = logging.getLogger(__name__)

# PostgREST: "Could not find the 'foo' column of 'bar' in the schema cache"
_MISSING_COLUMN_PATTERNS = (
    re.compile(r"the '(?P<column>.+?)' column of '(?P<table>.+?)'"),
    re.compile(r"column '(?P<column>.+?)' of '(?P<table>.+?)'"),
)

RLS_HINT = "Revise los permisos (RLS) en Supabase para la operación de LECTURA (SELECT)."


class SupabaseNotConfigured(RuntimeError):
    """Raised when Supabase credentials are missing."""


class SupabaseStoreError(RuntimeError):
    """Error devuelto por el almacén remoto, con mensaje apto para el usuario."""

    error_type = "store_error"

    def __init__(self, message: str, *, code: Optional[str] = None, operacion: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.operacion = operacion

    def user_message(self) -> str:
        if self.operacion:
            return f"Error al {self.operacion}: {self.message}"
        return self.message


class SchemaMismatchError(SupabaseStoreError):
    """Falta una columna (o tabla) en el esquema remoto."""

    error_type = "schema_mismatch"

    def __init__(self, table: str, column: str, *, code: Optional[str] = None, operacion: Optional[str] = None):
        message = (
            f"Error de Base de Datos: No se encontró la columna '{column}' en la tabla '{table}'.\n\n"
            f"Por favor, vaya a su panel de Supabase, abra la tabla '{table}' y asegúrese de que existe "
            f"una columna con ese nombre exacto (en minúsculas y con guiones bajos, ej: '{column}')."
        )
        super().__init__(message, code=code, operacion=operacion)
        self.table = table
        self.column = column


@lru_cache
def get_supabase_client() -> Client:
    """Instantiate a Supabase client, preferring the service role key."""
    key = settings.SUPABASE_SERVICE_ROLE_KEY or settings.SUPABASE_ANON_KEY
    if not settings.SUPABASE_URL or not key:
        raise SupabaseNotConfigured(
            "La configuración de Supabase no está disponible. Por favor, configure las variables "
            "de entorno SUPABASE_URL y SUPABASE_ANON_KEY."
        )
    return create_client(settings.SUPABASE_URL, key)


def _raw_message(error: Any) -> tuple[str, Optional[str]]:
    if isinstance(error, APIError):
        return str(error.message or error), error.code
    if isinstance(error, Mapping):
        return str(error.get("message") or error), error.get("code")
    if isinstance(error, httpx.HTTPError):
        return f"No se pudo contactar con Supabase ({error})", None
    return str(error), getattr(error, "code", None)


def classify_supabase_error(error: Any, operacion: Optional[str] = None) -> SupabaseStoreError:
    """Convierte un error crudo (APIError, error httpx, dict) en SupabaseStoreError o SchemaMismatchError."""
    if isinstance(error, SupabaseStoreError):
        return error
    message, code = _raw_message(error)
    if "Could not find the" in message and "column" in message:
        for pattern in _MISSING_COLUMN_PATTERNS:
            match = pattern.search(message)
            if match:
                return SchemaMismatchError(
                    match.group("table"), match.group("column"), code=code, operacion=operacion
                )
    return SupabaseStoreError(message, code=code, operacion=operacion)


# Errores que el cliente puede lanzar durante una llamada remota
STORE_EXCEPTIONS = (APIError, httpx.HTTPError)


@contextmanager
def supabase_errors(operacion: Optional[str] = None, table: Optional[str] = None) -> Iterator[None]:
    """Re-raise remote failures as classified SupabaseStoreError."""
    try:
        yield
    except STORE_EXCEPTIONS as exc:
        error = classify_supabase_error(exc, operacion)
        logger.error("Error Supabase al %s en '%s': %s", operacion or "operar", table or "?", error.message)
        raise error from exc
