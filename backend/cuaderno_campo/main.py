"""
Cuaderno de Campo - FastAPI Backend
Main application entry point
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
import logging
import traceback

from cuaderno_campo.api.v1.endpoints import parcelas, cultivos, finanzas, facturas, trabajos
from cuaderno_campo.api.v1.endpoints import ajustes, dashboard
from cuaderno_campo.core.config import settings
from cuaderno_campo.services.cuaderno.carga_service import load_into_app_state
from cuaderno_campo.services.cuaderno.cascada_service import ConfirmacionRequerida
from cuaderno_campo.services.cuaderno.entidades import CuadernoConfig
from cuaderno_campo.services.supabase_client import (
    SchemaMismatchError,
    SupabaseNotConfigured,
    SupabaseStoreError,
    get_supabase_client,
)

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    # Startup: las seis tablas se cargan a la vez; si falla, la API responde 503
    if load_into_app_state(app.state, get_supabase_client, CuadernoConfig.from_settings()):
        logger.info("Datos cargados desde Supabase")
    else:
        logger.error(f"Carga inicial fallida: {app.state.error_carga}")
    yield
    app.state.estado = None


app = FastAPI(
    title=f"{settings.APP_NAME} API",
    description="Backend API del Cuaderno de Campo - parcelas, cultivos, finanzas, facturas y trabajos",
    version=settings.APP_VERSION,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify allowed origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# GZip compression middleware - comprime respuestas > 1000 bytes (exportaciones)
app.add_middleware(GZipMiddleware, minimum_size=1000)


# Global exception handler for remote store errors
@app.exception_handler(SupabaseStoreError)
async def store_error_handler(request: Request, exc: SupabaseStoreError):
    """Errores de Supabase con mensaje apto para el usuario"""
    content = {"detail": exc.user_message(), "error_type": exc.error_type}
    if isinstance(exc, SchemaMismatchError):
        content["table"] = exc.table
        content["column"] = exc.column
    if exc.code:
        content["code"] = exc.code
    return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content=content)


@app.exception_handler(SupabaseNotConfigured)
async def not_configured_handler(request: Request, exc: SupabaseNotConfigured):
    logger.error(f"Supabase not configured: {exc}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": str(exc), "error_type": "not_configured"}
    )


@app.exception_handler(ConfirmacionRequerida)
async def confirmation_handler(request: Request, exc: ConfirmacionRequerida):
    """Operaciones destructivas sin ?confirmar=true"""
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": str(exc), "error_type": "confirmation_required"}
    )


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    """Documentos de importación no válidos y registros sin id"""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc), "error_type": "invalid_data"}
    )


# Errores 500: se registra el traceback completo
@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Log unhandled exceptions and return a generic 500"""
    tb = traceback.format_exc()
    logger.error(f"Unhandled exception: {exc}\n{tb}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Error interno del servidor. Contacte con soporte si el problema persiste.",
        }
    )


# Include routers
app.include_router(parcelas.router, prefix="/api/v1")
app.include_router(cultivos.router, prefix="/api/v1")
app.include_router(finanzas.router, prefix="/api/v1")
app.include_router(facturas.router, prefix="/api/v1")
app.include_router(trabajos.router, prefix="/api/v1")
app.include_router(ajustes.router, prefix="/api/v1")
app.include_router(dashboard.router, prefix="/api/v1")


@app.get("/")
async def root():
    """Health check endpoint"""
    return {
        "message": f"{settings.APP_NAME} API",
        "version": settings.APP_VERSION,
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint - no consulta Supabase, sólo el estado de la carga"""
    estado = getattr(app.state, "estado", None)
    return {
        "status": "healthy",
        "service": "cuaderno-campo-api",
        "version": settings.APP_VERSION,
        "database": "connected" if estado is not None and estado.conectado else "disconnected",
        "error_carga": getattr(app.state, "error_carga", None),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
