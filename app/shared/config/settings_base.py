# -*- coding: utf-8 -*-
"""
app/shared/config/settings_base.py

Configuración base de la aplicación usando Pydantic v2 (pydantic-settings).

Define los valores comunes a todos los entornos: base de datos, Redis,
frontend, bot de Telegram, rutas del catálogo de cursos y logging.
Las subclases por entorno (dev / test / prod) sólo sobreescriben defaults.

Autor: CourseHub
Fecha: 19/10/2026
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field, SecretStr, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["development", "test", "production"]

DEFAULT_DB_URL = "sqlite+aiosqlite:///./data/app.db"


class BaseAppSettings(BaseSettings):
    """Settings comunes a todos los entornos."""

    # =========================
    # Entorno
    # =========================
    python_env: EnvName = Field(default="development", validation_alias="PYTHON_ENV")
    app_name: str = Field(default="CourseHub API", validation_alias="APP_NAME")
    app_version: str = Field(default="1.0.0", validation_alias="APP_VERSION")

    # =========================
    # Base de datos
    # =========================
    db_url: str = Field(
        default=DEFAULT_DB_URL,
        validation_alias="DB_URL",
    )
    db_echo: bool = Field(default=False, validation_alias="DB_ECHO")
    # Crea las tablas al arrancar (útil con SQLite; en Postgres usar migraciones)
    db_auto_create: bool = Field(default=True, validation_alias="DB_AUTO_CREATE")

    # =========================
    # Redis (opcional, la caché falla en abierto)
    # =========================
    redis_url: Optional[str] = Field(default=None, validation_alias="REDIS_URL")

    # =========================
    # Frontend / CORS
    # =========================
    frontend_url: str = Field(default="http://localhost:5173", validation_alias="FRONTEND_URL")
    cors_origins: str = Field(default="*", validation_alias="CORS_ORIGINS")

    # =========================
    # Telegram
    # =========================
    telegram_bot_token: SecretStr = Field(default=SecretStr(""), validation_alias="TELEGRAM_BOT_TOKEN")
    telegram_api_base: str = Field(default="https://api.telegram.org", validation_alias="TELEGRAM_API_BASE")
    telegram_init_data_ttl: int = Field(default=300, validation_alias="TELEGRAM_INIT_DATA_TTL")

    # =========================
    # Catálogo (config.yaml + directorio de cursos)
    # =========================
    config_path: Optional[str] = Field(default=None, validation_alias="CONFIG_PATH")
    courses_dir: Optional[str] = Field(default=None, validation_alias="COURSES_DIR")

    # =========================
    # Observabilidad / Logging
    # =========================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", validation_alias="LOG_LEVEL"
    )
    log_format: Literal["json", "pretty", "plain"] = Field(default="pretty", validation_alias="LOG_FORMAT")

    # ===== Helpers de entorno =====
    @computed_field  # type: ignore[misc]
    @property
    def is_dev(self) -> bool:
        return self.python_env == "development"

    @computed_field  # type: ignore[misc]
    @property
    def is_test(self) -> bool:
        return self.python_env == "test"

    @computed_field  # type: ignore[misc]
    @property
    def is_prod(self) -> bool:
        return self.python_env == "production"

    @field_validator("telegram_init_data_ttl")
    @classmethod
    def _clamp_init_data_ttl(cls, v: int) -> int:
        # Ventana de validez de initData acotada a [60, 3600] segundos
        return max(60, min(3600, int(v)))

    @field_validator("frontend_url")
    @classmethod
    def _strip_frontend_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # ===== Utilidad para normalizar CORS =====
    def get_cors_origins(self) -> list[str]:
        """Convierte cors_origins en lista procesable para CORS middleware."""
        if not self.cors_origins or self.cors_origins == "*":
            return ["*"]
        return [o.strip().strip('"').strip("'") for o in self.cors_origins.split(",") if o.strip()]

    def _security_checks(self) -> None:
        """
        Validaciones mínimas de coherencia.
        Se invoca desde config_loader tras instanciar el settings.
        """
        import logging
        logger = logging.getLogger(__name__)

        if self.is_prod:
            if not self.telegram_bot_token.get_secret_value():
                raise ValueError("TELEGRAM_BOT_TOKEN es requerido en producción")
            if self.db_url == DEFAULT_DB_URL:
                raise ValueError("DB_URL es requerido en producción (no se admite el SQLite por defecto)")
            if self.db_url.startswith("sqlite") and self.db_auto_create is False:
                logger.warning("DB_URL apunta a SQLite en producción sin DB_AUTO_CREATE")

            from .settings_payments import get_payments_settings
            if not get_payments_settings().paypal_webhook_id:
                logger.error(
                    "PAYPAL_WEBHOOK_ID no configurado en producción: "
                    "los webhooks de PayPal serán rechazados (500)"
                )

        if self.is_dev and not self.telegram_bot_token.get_secret_value():
            logger.info("ℹ️ TELEGRAM_BOT_TOKEN vacío - autenticación y notificaciones deshabilitadas")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


__all__ = ["BaseAppSettings", "EnvName", "DEFAULT_DB_URL"]
# Fin del archivo app/shared/config/settings_base.py
