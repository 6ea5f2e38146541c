"""
Copia de seguridad: exportación e importación completa del cuaderno

La importación NO es un merge: vacía las seis tablas y las vuelve a llenar con
el contenido del documento. Antes de borrar nada, cada registro del documento
pasa por su esquema; un documento con registros no válidos se rechaza entero.
No hay transacción que envuelva la secuencia; si un paso remoto falla, el error
se propaga y las tablas pueden quedar a medias.
"""
from __future__ import annotations

import json
import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional, Tuple, Type

from pydantic import ValidationError
from supabase import Client

from cuaderno_campo.schemas.base import CamelModel
from cuaderno_campo.schemas.cultivo import CultivoResponse
from cuaderno_campo.schemas.datos_fiscales import DatosFiscalesUpdate
from cuaderno_campo.schemas.factura import FacturaResponse
from cuaderno_campo.schemas.finanzas import RegistroFinancieroResponse
from cuaderno_campo.schemas.parcela import ParcelaResponse
from cuaderno_campo.schemas.trabajo import TrabajoResponse
from cuaderno_campo.services.cuaderno.datos_fiscales_service import build_payload
from cuaderno_campo.services.cuaderno.entidades import (
    INSERT_ORDER,
    WIPE_ORDER,
    CuadernoConfig,
    Entidad,
)
from cuaderno_campo.services.cuaderno.estado import EstadoLocal, Registro
from cuaderno_campo.services.supabase_client import SupabaseStoreError, supabase_errors
from cuaderno_campo.utils.casing import camel_keys, snake_keys

logger = logging.getLogger(__name__)

# Filas borradas por petición al vaciar una tabla: por debajo del tope de
# filas de PostgREST (db-max-rows) y con URLs `in.(...)` de longitud acotada
WIPE_BATCH_SIZE = 500

IMPORT_SCHEMAS: Dict[Entidad, Type[CamelModel]] = {
    Entidad.PARCELAS: ParcelaResponse,
    Entidad.CULTIVOS: CultivoResponse,
    Entidad.REGISTROS_FINANCIEROS: RegistroFinancieroResponse,
    Entidad.FACTURAS: FacturaResponse,
    Entidad.TRABAJOS: TrabajoResponse,
}


class FormatoImportacionError(ValueError):
    """El documento importado no tiene la forma de una exportación."""


def build_export(config: CuadernoConfig, estado: EstadoLocal, now: Optional[datetime] = None) -> Dict[str, Any]:
    snapshot = estado.snapshot()
    data = {config.entity(entidad).export_key: snapshot[entidad] for entidad in config.entities}
    exported_at = (now or datetime.now(timezone.utc)).isoformat().replace("+00:00", "Z")
    return {
        "appName": config.app_name,
        "version": config.export_version,
        "exportedAt": exported_at,
        "data": data,
    }


def serialize_export(envelope: Dict[str, Any]) -> str:
    return json.dumps(envelope, indent=2, ensure_ascii=False, default=str)


def backup_filename(day: Optional[date] = None) -> str:
    return f"cuaderno-campo-backup-{(day or date.today()).isoformat()}.json"


def extract_import_data(document: Any) -> Dict[str, Any]:
    """Comprueba la envoltura (sólo exige un objeto `data`) y devuelve su contenido."""
    if isinstance(document, dict) and isinstance(document.get("data"), dict):
        return document["data"]
    raise FormatoImportacionError("El formato del archivo no es válido.")


def _validate(schema: Type[CamelModel], value: Any, donde: str) -> Registro:
    try:
        return schema.model_validate(camel_keys(value)).to_registro()
    except ValidationError as exc:
        campos = ", ".join(".".join(str(p) for p in err["loc"]) or "registro" for err in exc.errors())
        raise FormatoImportacionError(
            f"El formato del archivo no es válido: {donde} ({campos})."
        ) from exc


def validate_import_data(
    config: CuadernoConfig, data: Dict[str, Any]
) -> Tuple[Dict[Entidad, List[Registro]], Optional[Registro]]:
    """
    Normaliza el contenido importado con los esquemas de cada entidad.

    Los totales de factura se recalculan y las claves quedan en camelCase.
    Devuelve las colecciones y los datos fiscales (ya con el id reservado).
    """
    colecciones: Dict[Entidad, List[Registro]] = {}
    for entidad in INSERT_ORDER:
        export_key = config.entity(entidad).export_key
        registros = data.get(export_key) or []
        if not isinstance(registros, list):
            raise FormatoImportacionError(f"El formato del archivo no es válido: '{export_key}' no es una lista.")
        colecciones[entidad] = [
            _validate(IMPORT_SCHEMAS[entidad], registro, f"{export_key}[{i}]")
            for i, registro in enumerate(registros)
            if registro
        ]

    datos_fiscales = None
    export_key = config.entity(Entidad.DATOS_FISCALES).export_key
    fiscal = data.get(export_key)
    if fiscal:
        datos = _validate(DatosFiscalesUpdate, fiscal, export_key)
        datos_fiscales = build_payload(datos, config.datos_fiscales_id)
    return colecciones, datos_fiscales


def _wipe_table(client: Client, table: str) -> int:
    """Borra por lotes hasta que la tabla queda vacía."""
    borrados = 0
    intentados = set()
    with supabase_errors("importar", table):
        while True:
            response = client.table(table).select("id").limit(WIPE_BATCH_SIZE).execute()
            ids = [row["id"] for row in (response.data or [])]
            if not ids:
                return borrados
            if intentados.intersection(ids):
                # El delete no falla pero no borra: política RLS sin DELETE
                raise SupabaseStoreError(
                    f"No se pudieron eliminar todas las filas de '{table}'. "
                    "Revise los permisos (RLS) en Supabase para la operación de BORRADO (DELETE).",
                    operacion="importar",
                )
            intentados.update(ids)
            client.table(table).delete().in_("id", ids).execute()
            borrados += len(ids)


def import_data(client: Client, config: CuadernoConfig, estado: EstadoLocal, data: Dict[str, Any]) -> EstadoLocal:
    """Sustituye todo el contenido remoto y local por el del documento importado."""
    colecciones, datos_fiscales = validate_import_data(config, data)

    for entidad in WIPE_ORDER:
        table = config.table(entidad)
        borrados = _wipe_table(client, table)
        logger.info("Importación: vaciada '%s' (%d filas)", table, borrados)

    if datos_fiscales:
        table = config.table(Entidad.DATOS_FISCALES)
        with supabase_errors("importar", table):
            client.table(table).insert(snake_keys(datos_fiscales)).execute()

    for entidad in INSERT_ORDER:
        registros = colecciones[entidad]
        if registros:
            table = config.table(entidad)
            with supabase_errors("importar", table):
                client.table(table).insert(snake_keys(registros)).execute()
            logger.info("Importación: %d filas en '%s'", len(registros), table)

    estado.replace_all(EstadoLocal(colecciones, datos_fiscales))
    return estado
