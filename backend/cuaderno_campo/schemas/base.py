"""Base común de los esquemas: atributos snake_case, JSON en camelCase"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict

from cuaderno_campo.utils.casing import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_registro(self) -> Dict[str, Any]:
        """Forma del registro en el estado local (claves camelCase, fechas ISO)."""
        return self.model_dump(mode="json", by_alias=True)


class RegistroGuardadoResponse(BaseModel):
    data: Dict[str, Any]
    aviso: Optional[str] = None
