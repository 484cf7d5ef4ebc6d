# -*- coding: utf-8 -*-
"""
app/shared/config/app_config.py

Carga del archivo config.yaml (catálogo de autores y cursos, moneda por
defecto y opciones de pago) validado con modelos Pydantic v2.

Resolución de la ruta:
    1) CONFIG_PATH (settings / variable de entorno)
    2) ./config.yaml
    3) ../config.yaml

El resultado se cachea por ruta; reset_app_config_cache() invalida la caché.

Autor: CourseHub
Fecha: 19/10/2026
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


class AppConfigError(RuntimeError):
    """config.yaml ausente, ilegible o inválido."""


class AppSection(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: Optional[str] = None
    description: Optional[str] = None
    default_currency: str = Field(alias="defaultCurrency", min_length=1)


class AuthorConfig(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(min_length=1)
    name: str
    avatar_url: Optional[str] = Field(default=None, alias="avatarUrl")


class CourseConfig(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: int = Field(ge=0)
    title: str
    author_id: Optional[str] = Field(default=None, alias="authorId")
    author: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    price: float = Field(ge=0)
    duration: Optional[str] = None
    program: Optional[list[str]] = None
    currency: Optional[str] = None
    visibility: Optional[Literal["public", "hidden"]] = None


class PayPalSection(BaseModel):
    model_config = ConfigDict(extra="allow")

    enabled: Optional[bool] = None
    currency: Optional[str] = Field(default=None, min_length=1)


class PaymentsSection(BaseModel):
    model_config = ConfigDict(extra="allow")

    paypal: Optional[PayPalSection] = None


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    app: AppSection
    payments: Optional[PaymentsSection] = None
    authors: list[AuthorConfig] = Field(default_factory=list)
    courses: list[CourseConfig] = Field(default_factory=list)

    def get_course(self, course_id: int) -> Optional[CourseConfig]:
        return next((c for c in self.courses if c.id == course_id), None)

    def get_author(self, author_id: str) -> Optional[AuthorConfig]:
        return next((a for a in self.authors if a.id == author_id), None)

    @property
    def paypal_currency(self) -> Optional[str]:
        if self.payments and self.payments.paypal:
            return self.payments.paypal.currency
        return None


def resolve_config_path(explicit: Optional[str] = None) -> Path:
    """Resuelve la ruta de config.yaml (explícita, cwd o directorio padre)."""
    if explicit:
        return Path(explicit)
    cwd_config = Path.cwd() / "config.yaml"
    if cwd_config.exists():
        return cwd_config
    parent_config = Path.cwd().parent / "config.yaml"
    if parent_config.exists():
        return parent_config
    return cwd_config


_cached_config: Optional[AppConfig] = None
_cached_path: Optional[Path] = None


def load_app_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Lee y valida config.yaml.

    Raises:
        AppConfigError: si el archivo no existe, no es YAML válido o no
            cumple el esquema.
    """
    global _cached_config, _cached_path

    if config_path is None:
        from .config_loader import get_settings
        config_path = get_settings().config_path

    path = resolve_config_path(config_path)
    if _cached_config is not None and _cached_path == path:
        return _cached_config

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.warning(f"[config] No se pudo leer {path}: {e}")
        raise AppConfigError(f"Failed to load config.yaml: {e}") from e

    try:
        parsed = yaml.safe_load(raw) or {}
        config = AppConfig.model_validate(parsed)
    except (yaml.YAMLError, ValidationError) as e:
        logger.error(f"[config] config.yaml inválido ({path}): {e}")
        raise AppConfigError("Invalid config.yaml") from e

    _cached_config = config
    _cached_path = path
    logger.info(f"[config] config.yaml cargado: {len(config.courses)} cursos, {len(config.authors)} autores")
    return config


def reset_app_config_cache() -> None:
    global _cached_config, _cached_path
    _cached_config = None
    _cached_path = None


__all__ = [
    "AppConfig",
    "AppConfigError",
    "AuthorConfig",
    "CourseConfig",
    "load_app_config",
    "reset_app_config_cache",
    "resolve_config_path",
]
# Fin del archivo app/shared/config/app_config.py
