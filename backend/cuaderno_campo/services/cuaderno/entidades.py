"""Tablas del cuaderno de campo y configuración inyectada en repositorios y coordinadores"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict

from cuaderno_campo.core.config import Settings, settings as default_settings


class Entidad(str, enum.Enum):
    PARCELAS = "parcelas"
    CULTIVOS = "cultivos"
    REGISTROS_FINANCIEROS = "registros_financieros"
    FACTURAS = "facturas"
    TRABAJOS = "trabajos"
    DATOS_FISCALES = "datos_fiscales"


@dataclass(frozen=True)
class EntityConfig:
    entidad: Entidad
    table: str
    export_key: str
    id_field: str = "id"
    singleton: bool = False


ENTITY_CONFIGS: Dict[Entidad, EntityConfig] = {
    Entidad.PARCELAS: EntityConfig(Entidad.PARCELAS, "parcelas", "parcelas"),
    Entidad.CULTIVOS: EntityConfig(Entidad.CULTIVOS, "cultivos", "cultivos"),
    Entidad.REGISTROS_FINANCIEROS: EntityConfig(
        Entidad.REGISTROS_FINANCIEROS, "registros_financieros", "registrosFinancieros"
    ),
    Entidad.FACTURAS: EntityConfig(Entidad.FACTURAS, "facturas", "facturas"),
    Entidad.TRABAJOS: EntityConfig(Entidad.TRABAJOS, "trabajos", "trabajos"),
    Entidad.DATOS_FISCALES: EntityConfig(
        Entidad.DATOS_FISCALES, "datos_fiscales", "datosFiscales", singleton=True
    ),
}

# Colecciones (todas menos la fila única de datos fiscales)
COLECCIONES = [e for e, c in ENTITY_CONFIGS.items() if not c.singleton]

# Importación: se vacían primero las tablas hijas
WIPE_ORDER = [
    Entidad.TRABAJOS,
    Entidad.FACTURAS,
    Entidad.REGISTROS_FINANCIEROS,
    Entidad.CULTIVOS,
    Entidad.PARCELAS,
    Entidad.DATOS_FISCALES,
]

# Importación: se insertan primero las tablas padre
INSERT_ORDER = [
    Entidad.PARCELAS,
    Entidad.CULTIVOS,
    Entidad.REGISTROS_FINANCIEROS,
    Entidad.FACTURAS,
    Entidad.TRABAJOS,
]


@dataclass(frozen=True)
class CuadernoConfig:
    """Configuración explícita de la capa de sincronización."""

    datos_fiscales_id: str
    app_name: str
    export_version: str
    health_check_table: str = "parcelas"
    load_workers: int = 6
    entities: Dict[Entidad, EntityConfig] = field(default_factory=lambda: dict(ENTITY_CONFIGS))

    @classmethod
    def from_settings(cls, settings: Settings = default_settings) -> "CuadernoConfig":
        return cls(
            datos_fiscales_id=settings.DATOS_FISCALES_ID,
            app_name=settings.APP_NAME,
            export_version=settings.EXPORT_VERSION,
            health_check_table=settings.HEALTH_CHECK_TABLE,
            load_workers=settings.STARTUP_LOAD_WORKERS,
        )

    def entity(self, entidad: Entidad) -> EntityConfig:
        return self.entities[entidad]

    def table(self, entidad: Entidad) -> str:
        return self.entities[entidad].table
