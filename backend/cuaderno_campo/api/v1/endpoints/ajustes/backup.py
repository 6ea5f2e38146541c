"""Exportación e importación de copias de seguridad"""
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import Response
from supabase import Client

from cuaderno_campo.api.deps import get_client, get_config, get_estado
from cuaderno_campo.services.cuaderno.backup_service import (
    backup_filename,
    build_export,
    extract_import_data,
    import_data,
    serialize_export,
)
from cuaderno_campo.services.cuaderno.cascada_service import ConfirmacionRequerida
from cuaderno_campo.services.cuaderno.entidades import COLECCIONES, CuadernoConfig
from cuaderno_campo.services.cuaderno.estado import EstadoLocal

CONFIRMACION_IMPORTAR = (
    "¿Está seguro? Importar un archivo reemplazará TODOS los datos actuales en la nube. "
    "Se recomienda exportar los datos actuales primero."
)

router = APIRouter()


@router.get("/exportar")
def exportar(
    config: CuadernoConfig = Depends(get_config),
    estado: EstadoLocal = Depends(get_estado),
):
    """Descarga todo el cuaderno como documento JSON"""
    content = serialize_export(build_export(config, estado))
    return Response(
        content=content,
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{backup_filename()}"'},
    )


@router.post("/importar")
def importar(
    document: Dict[str, Any] = Body(...),
    confirmar: bool = Query(False, description="Confirma que se reemplazan TODOS los datos"),
    client: Client = Depends(get_client),
    config: CuadernoConfig = Depends(get_config),
    estado: EstadoLocal = Depends(get_estado),
):
    """
    Reemplaza todos los datos por los del documento exportado.

    Sin transacción: si falla un paso, los datos remotos pueden quedar incompletos.
    """
    data = extract_import_data(document)
    if not confirmar:
        raise ConfirmacionRequerida(CONFIRMACION_IMPORTAR)
    import_data(client, config, estado, data)
    return {
        "message": "¡Datos importados con éxito!",
        "tables": {config.table(e): len(estado.get(e)) for e in COLECCIONES},
        "datos_fiscales": estado.datos_fiscales is not None,
    }
