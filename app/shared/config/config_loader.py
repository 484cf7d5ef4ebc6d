# -*- coding: utf-8 -*-
"""
app/shared/config/config_loader.py

Selecciona la clase de settings según PYTHON_ENV, ejecuta las
validaciones de producción y cachea la instancia.

Autor: CourseHub
Fecha: 19/10/2026
"""

import os
from functools import lru_cache

from .settings_base import BaseAppSettings
from .settings_dev import DevSettings
from .settings_prod import ProdSettings
from .settings_testing import EnvTestingSettings

_SETTINGS_BY_ENV: dict[str, type[BaseAppSettings]] = {
    "production": ProdSettings,
    "test": EnvTestingSettings,
}


@lru_cache(maxsize=1)
def get_settings() -> BaseAppSettings:
    """
    Raises:
        ValueError: configuración de producción incompleta
    """
    env = os.getenv("PYTHON_ENV", "development").strip().lower()
    settings = _SETTINGS_BY_ENV.get(env, DevSettings)()
    settings._security_checks()
    return settings


__all__ = ["get_settings"]
# Fin del archivo app/shared/config/config_loader.py
