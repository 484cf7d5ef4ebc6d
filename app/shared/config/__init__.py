# -*- coding: utf-8 -*-
"""
app/shared/config/__init__.py

Punto único de acceso a la configuración:
    from app.shared.config import settings, get_settings

`settings` es un proxy perezoso: la instancia real se crea en el primer
acceso a un atributo, de modo que los tests pueden fijar PYTHON_ENV antes.
"""

from __future__ import annotations

from typing import Any

from .config_loader import get_settings
from .settings_payments import PaymentsSettings, get_payments_settings
from .app_config import AppConfig, AppConfigError, load_app_config


class _SettingsProxy:
    """Delegación perezosa hacia get_settings()."""

    def __getattr__(self, name: str) -> Any:
        return getattr(get_settings(), name)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<SettingsProxy {get_settings()!r}>"


settings = _SettingsProxy()

__all__ = [
    "settings",
    "get_settings",
    "PaymentsSettings",
    "get_payments_settings",
    "AppConfig",
    "AppConfigError",
    "load_app_config",
]
# Fin del archivo app/shared/config/__init__.py
