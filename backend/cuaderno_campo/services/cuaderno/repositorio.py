"""
Repositorio genérico: alta, modificación y baja contra una tabla Supabase

Un único repositorio sirve para todas las entidades; lo que cambia entre ellas
(tabla, campo id) llega como EntityConfig. El estado local sólo se toca a
través del setter recibido y sólo después de que Supabase acepte la escritura.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional

from supabase import Client

from cuaderno_campo.services.cuaderno.entidades import EntityConfig
from cuaderno_campo.services.cuaderno.estado import Registro, Setter
from cuaderno_campo.services.supabase_client import RLS_HINT, supabase_errors
from cuaderno_campo.utils.casing import camel_keys, snake_keys

logger = logging.getLogger(__name__)


@dataclass
class ResultadoEscritura:
    """Registro aplicado al estado local y, si lo hay, aviso para el usuario."""

    registro: Registro
    aviso: Optional[str] = None


class EntityRepository:
    def __init__(self, client: Client, entity: EntityConfig, setter: Setter):
        self.client = client
        self.entity = entity
        self.setter = setter

    @property
    def table(self) -> str:
        return self.entity.table

    def add(self, item: Dict[str, Any]) -> ResultadoEscritura:
        id_field = self.entity.id_field
        nuevo = {k: v for k, v in item.items() if k != id_field}
        nuevo[id_field] = str(uuid.uuid4())

        with supabase_errors("añadir", self.table):
            response = self.client.table(self.table).insert([snake_keys(nuevo)]).execute()

        rows = response.data or []
        if not rows:
            # Supabase aceptó el insert pero no devuelve la fila: falta la política SELECT
            logger.warning("Insert en '%s' sin filas devueltas (id=%s)", self.table, nuevo[id_field])
            self.setter(lambda prev: [*prev, nuevo])
            return ResultadoEscritura(
                nuevo, f"Error: El elemento se guardó, pero no se pudo recuperar. {RLS_HINT}"
            )

        confirmado = camel_keys(rows[0])
        self.setter(lambda prev: [*prev, confirmado])
        return ResultadoEscritura(confirmado)

    def update(self, item: Dict[str, Any]) -> ResultadoEscritura:
        id_field = self.entity.id_field
        registro_id = item.get(id_field)
        if not registro_id:
            raise ValueError(f"Falta el campo '{id_field}' del registro a actualizar")
        cambios = {k: v for k, v in item.items() if k != id_field}

        with supabase_errors("actualizar", self.table):
            response = (
                self.client.table(self.table)
                .update(snake_keys(cambios))
                .eq(id_field, registro_id)
                .execute()
            )

        rows = response.data or []
        aviso = None
        if rows:
            aplicado = camel_keys(rows[0])
        else:
            logger.warning("Update en '%s' sin filas devueltas (id=%s)", self.table, registro_id)
            aplicado = dict(item)
            aviso = f"Error: El elemento se actualizó, pero no se pudo recuperar. {RLS_HINT}"

        self.setter(lambda prev: [aplicado if r.get(id_field) == registro_id else r for r in prev])
        return ResultadoEscritura(aplicado, aviso)

    def delete(self, registro_id: str) -> None:
        id_field = self.entity.id_field
        with supabase_errors("eliminar", self.table):
            self.client.table(self.table).delete().eq(id_field, registro_id).execute()

        self.setter(lambda prev: [r for r in prev if r.get(id_field) != registro_id])
