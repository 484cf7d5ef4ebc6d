# -*- coding: utf-8 -*-
"""
app/shared/database/__init__.py

Re-exporta utilidades comunes de base de datos.

Autor: CourseHub
Fecha: 19/10/2026
"""

from __future__ import annotations

from .database import (
    build_engine,
    build_sessionmaker,
    get_engine,
    get_sessionmaker,
    set_engine,
    init_models,
    dispose_engine,
    get_async_session,
    get_db,
    check_database_health,
)
from .base import Base, NAMING_CONVENTION, as_str_enum

__all__ = [
    "build_engine",
    "build_sessionmaker",
    "get_engine",
    "get_sessionmaker",
    "set_engine",
    "init_models",
    "dispose_engine",
    "Base",
    "NAMING_CONVENTION",
    "as_str_enum",
    "get_async_session",
    "get_db",
    "check_database_health",
]

# Fin del archivo app/shared/database/__init__.py
