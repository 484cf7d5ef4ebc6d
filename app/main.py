# -*- coding: utf-8 -*-
"""
app/main.py

Punto de entrada principal del backend de CourseHub (Mini App de Telegram).

Ajustes clave:
- .env cargado con python-dotenv antes de leer settings
- Logging configurado desde settings (plain en dev, JSON en prod)
- Lifespan: crea tablas si DB_AUTO_CREATE; en shutdown cierra los
  clientes httpx de PayPal y Telegram, Redis y el engine de BD
- CORS fail-closed en producción
- Respuestas JSON forzadas a charset=utf-8

Autor: CourseHub
Fecha: 19/10/2026
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

# ---------------------------------------------------------------------------
# Cargar .env ANTES de instanciar settings
# En PROD: override=False para respetar variables del entorno
# ---------------------------------------------------------------------------
from dotenv import load_dotenv

_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
_PYTHON_ENV = os.getenv("PYTHON_ENV", "development").strip().lower()
load_dotenv(dotenv_path=_ENV_PATH, override=_PYTHON_ENV == "development")

import anyio
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from app.modules.notifications.services.telegram_notifier import close_telegram_notifier
from app.modules.payments.services.paypal_client import close_paypal_client
from app.shared.config import get_settings
from app.shared.config.logging_config import setup_logging
from app.shared.database import dispose_engine, init_models
from app.shared.redis import close_async_redis_client
from app.shared.utils.json_response import UTF8JSONResponse, json_response_utf8

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ────────── STARTUP ──────────
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    if settings.db_auto_create:
        await init_models()
        logger.info("Tablas verificadas/creadas (DB_AUTO_CREATE=1)")

    logger.info(f"🟢 {settings.app_name} iniciado (env={settings.python_env})")
    try:
        yield
    finally:
        # ────────── SHUTDOWN ──────────
        logger.info("🔴 Iniciando shutdown ordenado...")
        with anyio.CancelScope(shield=True):
            await close_paypal_client()
            await close_telegram_notifier()
            await close_async_redis_client()
            await dispose_engine()
        logger.info("🔴 Backend apagado.")


openapi_tags = [
    {"name": "payments:purchase", "description": "Compra de cursos con PayPal"},
    {"name": "payments:webhooks", "description": "Webhooks de PayPal"},
    {"name": "payments:transactions", "description": "Historial de transacciones"},
    {"name": "courses:user", "description": "Cursos del usuario"},
]


def _configure_cors(app_instance: FastAPI) -> dict:
    """
    Configura CORS middleware.

    En producción sólo se aceptan orígenes explícitos: sin CORS_ORIGINS
    (o con "*") no se registra el middleware y las peticiones
    cross-origin quedan bloqueadas.
    """
    settings = get_settings()
    origins_list = settings.get_cors_origins()
    is_wildcard_only = origins_list == ["*"]

    if settings.is_prod and (not os.getenv("CORS_ORIGINS") or is_wildcard_only):
        logger.error(
            "❌ CORS DISABLED: CORS_ORIGINS explícito requerido en producción. "
            "Todas las peticiones cross-origin serán BLOQUEADAS."
        )
        return {"cors_disabled": True, "allow_origins": []}

    cors_config = {
        "allow_origins": origins_list,
        # "*" con allow_credentials=True es inválido en navegadores
        "allow_credentials": not is_wildcard_only,
        "allow_methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"] if not is_wildcard_only else ["*"],
        "allow_headers": ["*"],
        "max_age": 600,
    }
    app_instance.add_middleware(CORSMiddleware, **cors_config)
    logger.info(f"CORS habilitado para {origins_list}")
    return cors_config


def create_app() -> FastAPI:
    settings = get_settings()
    app_instance = FastAPI(
        title=settings.app_name,
        description="API de la Mini App de cursos: compras con PayPal y acceso a cursos",
        version=settings.app_version,
        lifespan=lifespan,
        openapi_tags=openapi_tags,
        default_response_class=UTF8JSONResponse,  # Fuerza charset=utf-8 en todas las respuestas JSON
    )

    _configure_cors(app_instance)

    @app_instance.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """HTTPException con charset=utf-8 (acentos en mensajes de error)."""
        return json_response_utf8(
            content={"detail": exc.detail},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    from app.routes import router as main_router

    app_instance.include_router(main_router)
    return app_instance


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )

# Fin del archivo app/main.py
