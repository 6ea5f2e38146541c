from typing import Optional

from cuaderno_campo.schemas.base import CamelModel


class DatosFiscalesBase(CamelModel):
    nombre_o_razon_social: str
    nif_cif: str
    direccion: str
    codigo_postal: str
    localidad: str
    provincia: str
    pais: str
    email: Optional[str] = None
    telefono: Optional[str] = None


class DatosFiscalesUpdate(DatosFiscalesBase):
    pass


class DatosFiscalesResponse(DatosFiscalesBase):
    id: str
