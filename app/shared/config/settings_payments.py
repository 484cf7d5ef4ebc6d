# -*- coding: utf-8 -*-
"""
app/shared/config/settings_payments.py

Configuración de pagos con PayPal.

Descripción:
    Centraliza credenciales, modo (sandbox/live), webhook ID para
    verificación de firmas y tiempos de espera del cliente HTTP.

Autor: CourseHub
Fecha: 19/10/2026
"""

from __future__ import annotations

from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaymentsSettings(BaseSettings):
    """Configuración de sistema de pagos."""

    # =========================================================================
    # PAYPAL
    # =========================================================================

    paypal_client_id: Optional[str] = Field(
        default=None,
        description="PayPal client ID"
    )

    paypal_client_secret: Optional[str] = Field(
        default=None,
        description="PayPal client secret"
    )

    paypal_mode: str = Field(
        default="sandbox",
        description="Modo de PayPal: 'sandbox' o 'live'"
    )

    paypal_webhook_id: Optional[str] = Field(
        default=None,
        description="PayPal webhook ID para validación de firmas"
    )

    # =========================================================================
    # CLIENTE HTTP
    # =========================================================================

    paypal_timeout_seconds: float = Field(
        default=15.0,
        description="Timeout total de llamadas a la API de PayPal"
    )

    paypal_max_retries: int = Field(
        default=2,
        description="Reintentos ante errores transitorios (429/502/503/504)"
    )

    @field_validator("paypal_mode")
    @classmethod
    def _normalize_mode(cls, v: str) -> str:
        mode = (v or "sandbox").strip().lower()
        if mode not in ("sandbox", "live"):
            raise ValueError("PAYPAL_MODE debe ser 'sandbox' o 'live'")
        return mode

    @field_validator("paypal_webhook_id", "paypal_client_id", "paypal_client_secret")
    @classmethod
    def _empty_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @property
    def paypal_base_url(self) -> str:
        if self.paypal_mode == "live":
            return "https://api-m.paypal.com"
        return "https://api-m.sandbox.paypal.com"

    # =========================================================================
    # CONFIGURACIÓN DE PYDANTIC
    # =========================================================================

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Singleton global
_payments_settings: Optional[PaymentsSettings] = None


def get_payments_settings() -> PaymentsSettings:
    """
    Obtiene la instancia global de configuración de pagos.

    Returns:
        PaymentsSettings: Configuración de pagos
    """
    global _payments_settings
    if _payments_settings is None:
        _payments_settings = PaymentsSettings()
    return _payments_settings


def reset_payments_settings() -> None:
    """Invalida el singleton (tests)."""
    global _payments_settings
    _payments_settings = None


__all__ = [
    "PaymentsSettings",
    "get_payments_settings",
    "reset_payments_settings",
]
# Fin del archivo app/shared/config/settings_payments.py
