"""
Endpoint CRUD comunes para las entidades del cuaderno

Todas las entidades comparten el mismo repositorio genérico; aquí se construye
un router por entidad a partir de su Entidad y de sus esquemas.
"""
from typing import Callable, List, Optional, Type

from fastapi import APIRouter, Depends, HTTPException, status
from supabase import Client

from cuaderno_campo.api.deps import get_client, get_config, get_estado
from cuaderno_campo.schemas.base import CamelModel, RegistroGuardadoResponse
from cuaderno_campo.services.cuaderno.entidades import CuadernoConfig, Entidad
from cuaderno_campo.services.cuaderno.estado import EstadoLocal, Registro
from cuaderno_campo.services.cuaderno.repositorio import EntityRepository, ResultadoEscritura


def get_repository(
    entidad: Entidad, client: Client, config: CuadernoConfig, estado: EstadoLocal
) -> EntityRepository:
    return EntityRepository(client, config.entity(entidad), estado.setter_for(entidad))


def saved_response(resultado: ResultadoEscritura) -> RegistroGuardadoResponse:
    return RegistroGuardadoResponse(data=resultado.registro, aviso=resultado.aviso)


def build_crud_router(
    entidad: Entidad,
    create_schema: Type[CamelModel],
    response_schema: Type[CamelModel],
    not_found: str,
    *,
    validate: Optional[Callable[[EstadoLocal, Registro], None]] = None,
    include_delete: bool = True,
) -> APIRouter:
    router = APIRouter()

    def _get_or_404(estado: EstadoLocal, item_id: str) -> Registro:
        obj = estado.find(entidad, item_id)
        if not obj:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=not_found)
        return obj

    @router.get("/", response_model=List[response_schema])
    def list_items(estado: EstadoLocal = Depends(get_estado)):
        return estado.get(entidad)

    @router.get("/{item_id}", response_model=response_schema)
    def get_item(item_id: str, estado: EstadoLocal = Depends(get_estado)):
        return _get_or_404(estado, item_id)

    @router.post("/", response_model=RegistroGuardadoResponse, status_code=status.HTTP_201_CREATED)
    def create_item(
        data: create_schema,
        client: Client = Depends(get_client),
        config: CuadernoConfig = Depends(get_config),
        estado: EstadoLocal = Depends(get_estado),
    ):
        registro = data.to_registro()
        if validate:
            validate(estado, registro)
        resultado = get_repository(entidad, client, config, estado).add(registro)
        return saved_response(resultado)

    @router.put("/{item_id}", response_model=RegistroGuardadoResponse)
    def update_item(
        item_id: str,
        data: create_schema,
        client: Client = Depends(get_client),
        config: CuadernoConfig = Depends(get_config),
        estado: EstadoLocal = Depends(get_estado),
    ):
        _get_or_404(estado, item_id)
        registro = {**data.to_registro(), "id": item_id}
        if validate:
            validate(estado, registro)
        resultado = get_repository(entidad, client, config, estado).update(registro)
        return saved_response(resultado)

    if include_delete:
        @router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
        def delete_item(
            item_id: str,
            client: Client = Depends(get_client),
            config: CuadernoConfig = Depends(get_config),
            estado: EstadoLocal = Depends(get_estado),
        ):
            _get_or_404(estado, item_id)
            get_repository(entidad, client, config, estado).delete(item_id)
            return None

    return router
