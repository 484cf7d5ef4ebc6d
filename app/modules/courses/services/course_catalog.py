# -*- coding: utf-8 -*-
"""
app/modules/courses/services/course_catalog.py

Catálogo de cursos: directorio de contenido + metadatos de config.yaml.

Un curso "existe" si hay un directorio COURSES_DIR/<id>. Sus metadatos
(título, autor, precio, moneda) salen de config.yaml. La moneda se
resuelve: curso -> payments.paypal.currency -> app.defaultCurrency.

Resolución de COURSES_DIR:
    1) COURSES_DIR (settings / variable de entorno)
    2) ./courses
    3) ../courses

Autor: CourseHub
Fecha: 19/10/2026
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Optional

from app.shared.config.app_config import AppConfig, load_app_config
from app.shared.utils.currency import normalize_currency, to_amount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CourseMetadata:
    course_id: int
    title: str
    author: str
    price: Decimal
    currency: str
    author_avatar: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    image_url: Optional[str] = None
    duration: Optional[str] = None


def resolve_courses_dir(explicit: Optional[str] = None) -> Path:
    if explicit:
        return Path(explicit)
    cwd_courses = Path.cwd() / "courses"
    if cwd_courses.exists():
        return cwd_courses
    parent_courses = Path.cwd().parent / "courses"
    if parent_courses.exists():
        return parent_courses
    return cwd_courses


def resolve_paypal_currency(config: AppConfig, course_currency: Optional[str] = None) -> str:
    """Moneda de cobro: curso -> payments.paypal.currency -> app.defaultCurrency."""
    paypal_currency = normalize_currency(config.paypal_currency, config.app.default_currency)
    return normalize_currency(course_currency, paypal_currency)


class CourseCatalog:
    """Acceso de sólo lectura al contenido y metadatos de los cursos."""

    def __init__(self, courses_dir: Optional[str] = None, config_path: Optional[str] = None):
        if courses_dir is None or config_path is None:
            from app.shared.config import get_settings
            settings = get_settings()
            courses_dir = courses_dir or settings.courses_dir
            config_path = config_path or settings.config_path
        self.courses_dir = resolve_courses_dir(courses_dir)
        self._config_path = config_path

    def load_config(self) -> AppConfig:
        return load_app_config(self._config_path)

    def course_exists(self, course_id: int) -> bool:
        return (self.courses_dir / str(course_id)).is_dir()

    def load_metadata(self, course_id: int) -> Optional[CourseMetadata]:
        """Metadatos del curso o None si no está declarado en config.yaml."""
        config = self.load_config()
        course = config.get_course(course_id)
        if course is None:
            return None

        author_cfg = config.get_author(course.author_id) if course.author_id else None
        author_name = (author_cfg.name if author_cfg else None) or course.author or "Unknown"

        return CourseMetadata(
            course_id=course.id,
            title=course.title,
            author=author_name,
            author_avatar=author_cfg.avatar_url if author_cfg else None,
            price=to_amount(course.price),
            currency=resolve_paypal_currency(config, course.currency),
            description=course.description,
            category=course.category,
            image_url=course.image_url,
            duration=course.duration,
        )

    def default_paypal_currency(self) -> str:
        return resolve_paypal_currency(self.load_config())


_catalog: Optional[CourseCatalog] = None


def get_course_catalog() -> CourseCatalog:
    global _catalog
    if _catalog is None:
        _catalog = CourseCatalog()
        logger.info(f"[catalog] COURSES_DIR={_catalog.courses_dir}")
    return _catalog


def set_course_catalog(catalog: Optional[CourseCatalog]) -> None:
    global _catalog
    _catalog = catalog


__all__ = [
    "CourseMetadata",
    "CourseCatalog",
    "get_course_catalog",
    "set_course_catalog",
    "resolve_courses_dir",
    "resolve_paypal_currency",
]
# Fin del archivo app/modules/courses/services/course_catalog.py
