"""Cultivos: CRUD, control de parcela y borrado en cascada"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from supabase import Client

from cuaderno_campo.api.deps import get_client, get_config, get_estado
from cuaderno_campo.api.v1.endpoints.common import build_crud_router
from cuaderno_campo.schemas.cultivo import CultivoCreate, CultivoResponse
from cuaderno_campo.services.cuaderno.cascada_service import CascadeCoordinator
from cuaderno_campo.services.cuaderno.entidades import CuadernoConfig, Entidad
from cuaderno_campo.services.cuaderno.estado import EstadoLocal, Registro


def validate_parcela(estado: EstadoLocal, registro: Registro) -> None:
    """La parcela del cultivo debe existir antes de enviarlo a Supabase."""
    parcela_id = registro.get("parcelaId")
    if not parcela_id:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="Por favor, seleccione una parcela."
        )
    if not estado.find(Entidad.PARCELAS, parcela_id):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"La parcela '{parcela_id}' no existe.",
        )


router = APIRouter(prefix="/cultivos", tags=["cultivos"])
router.include_router(
    build_crud_router(
        Entidad.CULTIVOS,
        CultivoCreate,
        CultivoResponse,
        "Cultivo no encontrado",
        validate=validate_parcela,
        include_delete=False,
    )
)


@router.delete("/{cultivo_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_cultivo(
    cultivo_id: str,
    confirmar: bool = Query(False, description="Confirma el borrado de los trabajos asociados"),
    client: Client = Depends(get_client),
    config: CuadernoConfig = Depends(get_config),
    estado: EstadoLocal = Depends(get_estado),
):
    if not estado.find(Entidad.CULTIVOS, cultivo_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cultivo no encontrado")
    CascadeCoordinator(client, config, estado).delete_cultivo(cultivo_id, confirmado=confirmar)
    return None
