"""Conversión de claves entre camelCase (estado de la app) y snake_case (columnas Supabase)"""
from __future__ import annotations

import re
from typing import Any

_UPPER_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def to_snake(key: str) -> str:
    """`nombreCultivo` -> `nombre_cultivo`. Las claves ya en snake_case no cambian."""
    stripped = key.lstrip("_")
    prefix = key[: len(key) - len(stripped)]
    return prefix + _UPPER_BOUNDARY.sub("_", stripped).lower()


def to_camel(key: str) -> str:
    """
    `nombre_cultivo` -> `nombreCultivo`. Las claves ya en camelCase no cambian.

    Un segmento que empieza por cifra conserva su guion bajo (`iva_21` -> `iva_21`):
    las cifras no tienen mayúscula y `to_snake` no podría recuperar la separación.
    """
    stripped = key.lstrip("_")
    prefix = key[: len(key) - len(stripped)]
    head, *rest = stripped.split("_")
    return prefix + head + "".join(
        f"_{part}" if part[:1].isdigit() else part[:1].upper() + part[1:] for part in rest
    )


def _convert_keys(value: Any, convert) -> Any:
    if isinstance(value, dict):
        return {convert(k) if isinstance(k, str) else k: _convert_keys(v, convert) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_convert_keys(item, convert) for item in value]
    return value


def snake_keys(value: Any) -> Any:
    """Reescribe recursivamente las claves de dict/list en snake_case (ruta de escritura)."""
    return _convert_keys(value, to_snake)


def camel_keys(value: Any) -> Any:
    """Inversa de `snake_keys` (ruta de lectura)."""
    return _convert_keys(value, to_camel)
