"""Parcelas: CRUD y borrado en cascada"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from supabase import Client

from cuaderno_campo.api.deps import get_client, get_config, get_estado
from cuaderno_campo.api.v1.endpoints.common import build_crud_router
from cuaderno_campo.schemas.parcela import ParcelaCreate, ParcelaResponse
from cuaderno_campo.services.cuaderno.cascada_service import CascadeCoordinator
from cuaderno_campo.services.cuaderno.entidades import CuadernoConfig, Entidad
from cuaderno_campo.services.cuaderno.estado import EstadoLocal

router = APIRouter(prefix="/parcelas", tags=["parcelas"])
router.include_router(
    build_crud_router(
        Entidad.PARCELAS, ParcelaCreate, ParcelaResponse, "Parcela no encontrada", include_delete=False
    )
)


@router.delete("/{parcela_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_parcela(
    parcela_id: str,
    confirmar: bool = Query(False, description="Confirma el borrado de cultivos y trabajos asociados"),
    client: Client = Depends(get_client),
    config: CuadernoConfig = Depends(get_config),
    estado: EstadoLocal = Depends(get_estado),
):
    if not estado.find(Entidad.PARCELAS, parcela_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Parcela no encontrada")
    CascadeCoordinator(client, config, estado).delete_parcela(parcela_id, confirmado=confirmar)
    return None
