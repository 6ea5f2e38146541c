"""Estado local en memoria: fuente de verdad de la app, parcheada tras cada operación remota"""
from __future__ import annotations

import threading
from copy import deepcopy
from typing import Any, Callable, Dict, List, Optional

from cuaderno_campo.services.cuaderno.entidades import COLECCIONES, Entidad

Registro = Dict[str, Any]
Updater = Callable[[List[Registro]], List[Registro]]
Setter = Callable[[Updater], None]


class EstadoLocal:
    """Colecciones en camelCase tal como las ve la app."""

    def __init__(
        self,
        colecciones: Optional[Dict[Entidad, List[Registro]]] = None,
        datos_fiscales: Optional[Registro] = None,
        conectado: bool = False,
    ):
        self._lock = threading.Lock()
        self._colecciones: Dict[Entidad, List[Registro]] = {e: [] for e in COLECCIONES}
        for entidad, registros in (colecciones or {}).items():
            self._colecciones[entidad] = list(registros)
        self._datos_fiscales = datos_fiscales
        self.conectado = conectado

    def get(self, entidad: Entidad) -> List[Registro]:
        with self._lock:
            return list(self._colecciones[entidad])

    def find(self, entidad: Entidad, registro_id: str) -> Optional[Registro]:
        return next((r for r in self.get(entidad) if r.get("id") == registro_id), None)

    def update(self, entidad: Entidad, updater: Updater) -> None:
        with self._lock:
            self._colecciones[entidad] = list(updater(list(self._colecciones[entidad])))

    def setter_for(self, entidad: Entidad) -> Setter:
        return lambda updater: self.update(entidad, updater)

    @property
    def datos_fiscales(self) -> Optional[Registro]:
        with self._lock:
            return self._datos_fiscales

    def set_datos_fiscales(self, datos: Optional[Registro]) -> None:
        with self._lock:
            self._datos_fiscales = datos

    def replace_all(self, other: "EstadoLocal") -> None:
        """Sustituye todo el contenido (tras una importación o una recarga)."""
        snapshot = other.snapshot()
        with self._lock:
            for entidad in COLECCIONES:
                self._colecciones[entidad] = snapshot[entidad]
            self._datos_fiscales = snapshot[Entidad.DATOS_FISCALES]

    def snapshot(self) -> Dict[Entidad, Any]:
        with self._lock:
            data: Dict[Entidad, Any] = {e: deepcopy(self._colecciones[e]) for e in COLECCIONES}
            data[Entidad.DATOS_FISCALES] = deepcopy(self._datos_fiscales)
        return data
