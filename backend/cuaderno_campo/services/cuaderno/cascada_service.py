"""
Borrado en cascada de parcelas y cultivos

Supabase no tiene las FK en cascada, así que los hijos se borran a mano y
siempre antes que el padre. Cada paso es una llamada independiente: si uno
falla se aborta la secuencia y los pasos ya hechos NO se deshacen.
"""
from __future__ import annotations

import logging
from typing import List

from supabase import Client

from cuaderno_campo.services.cuaderno.entidades import CuadernoConfig, Entidad
from cuaderno_campo.services.cuaderno.estado import EstadoLocal
from cuaderno_campo.services.cuaderno.repositorio import EntityRepository
from cuaderno_campo.services.supabase_client import supabase_errors

logger = logging.getLogger(__name__)

CONFIRMACION_PARCELA = (
    "¿Está seguro? Se eliminarán también los cultivos y trabajos asociados a esta parcela."
)
CONFIRMACION_CULTIVO = "¿Está seguro? Se eliminarán también los trabajos asociados a este cultivo."


class ConfirmacionRequerida(RuntimeError):
    """El borrado en cascada necesita una confirmación explícita del usuario."""


class CascadeCoordinator:
    def __init__(self, client: Client, config: CuadernoConfig, estado: EstadoLocal):
        self.client = client
        self.config = config
        self.estado = estado

    def _repository(self, entidad: Entidad) -> EntityRepository:
        return EntityRepository(self.client, self.config.entity(entidad), self.estado.setter_for(entidad))

    def delete_parcela(self, parcela_id: str, confirmado: bool = False) -> List[str]:
        """Borra la parcela con sus cultivos y trabajos. Devuelve los id de cultivo borrados."""
        if not confirmado:
            raise ConfirmacionRequerida(CONFIRMACION_PARCELA)

        cultivos = self.config.table(Entidad.CULTIVOS)
        trabajos = self.config.table(Entidad.TRABAJOS)

        with supabase_errors("eliminar", cultivos):
            response = self.client.table(cultivos).select("id").eq("parcela_id", parcela_id).execute()
        cultivo_ids = [row["id"] for row in (response.data or [])]
        logger.info("Parcela %s: %d cultivos asociados", parcela_id, len(cultivo_ids))

        if cultivo_ids:
            with supabase_errors("eliminar", trabajos):
                self.client.table(trabajos).delete().in_("cultivo_id", cultivo_ids).execute()
        with supabase_errors("eliminar", trabajos):
            self.client.table(trabajos).delete().eq("parcela_id", parcela_id).execute()
        with supabase_errors("eliminar", cultivos):
            self.client.table(cultivos).delete().eq("parcela_id", parcela_id).execute()

        self._repository(Entidad.PARCELAS).delete(parcela_id)

        borrados = set(cultivo_ids)
        self.estado.update(
            Entidad.TRABAJOS,
            lambda prev: [
                t for t in prev
                if t.get("parcelaId") != parcela_id and t.get("cultivoId") not in borrados
            ],
        )
        self.estado.update(
            Entidad.CULTIVOS,
            lambda prev: [
                c for c in prev if c.get("parcelaId") != parcela_id and c.get("id") not in borrados
            ],
        )
        logger.info("Parcela %s eliminada en cascada", parcela_id)
        return cultivo_ids

    def delete_cultivo(self, cultivo_id: str, confirmado: bool = False) -> None:
        if not confirmado:
            raise ConfirmacionRequerida(CONFIRMACION_CULTIVO)

        trabajos = self.config.table(Entidad.TRABAJOS)
        with supabase_errors("eliminar", trabajos):
            self.client.table(trabajos).delete().eq("cultivo_id", cultivo_id).execute()

        self._repository(Entidad.CULTIVOS).delete(cultivo_id)

        self.estado.update(
            Entidad.TRABAJOS, lambda prev: [t for t in prev if t.get("cultivoId") != cultivo_id]
        )
        logger.info("Cultivo %s eliminado en cascada", cultivo_id)
