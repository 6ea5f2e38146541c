"""
Configuration settings for Cuaderno de Campo
"""
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "Cuaderno de Campo Agrícola"
    APP_VERSION: str = "1.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Supabase
    # La app no tiene usuarios: basta la anon key si las políticas RLS
    # permiten SELECT/INSERT/UPDATE/DELETE en todas las tablas.
    SUPABASE_URL: Optional[str] = None
    SUPABASE_ANON_KEY: Optional[str] = None
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = None

    # Fila única de datos fiscales (siempre el mismo UUID)
    DATOS_FISCALES_ID: str = "00000000-0000-0000-0000-000000000001"

    # Copias de seguridad
    EXPORT_VERSION: str = "1.1-supabase"

    # Tabla usada para la verificación de conexión
    HEALTH_CHECK_TABLE: str = "parcelas"

    # Carga inicial: una petición por tabla en paralelo
    STARTUP_LOAD_WORKERS: int = 6

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
