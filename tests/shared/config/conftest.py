# -*- coding: utf-8 -*-
"""
tests/shared/config/conftest.py

Aísla variables de entorno y cachés de settings en cada test de config.

Autor: CourseHub
Fecha: 19/10/2026
"""
import os

import pytest

from app.shared.config import get_settings
from app.shared.config.settings_payments import reset_payments_settings

ISOLATED_PREFIXES = (
    "DB_", "PAYPAL_", "CORS_", "APP_", "REDIS_", "FRONTEND_", "LOG_", "CONFIG_", "COURSES_", "TELEGRAM_",
)


@pytest.fixture(autouse=True)
def _isolate_env_and_cache(monkeypatch):
    for key in list(os.environ):
        if key.startswith(ISOLATED_PREFIXES):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("PYTHON_ENV", "development")
    get_settings.cache_clear()
    reset_payments_settings()
    yield
    get_settings.cache_clear()
    reset_payments_settings()

# Fin del archivo tests/shared/config/conftest.py
