# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/checkout/validators.py

Validadores de negocio para el flujo de compra.

Autor: CourseHub
Fecha: 19/10/2026
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.courses.repositories.entitlement_repository import EntitlementRepository
from app.modules.courses.services.course_catalog import CourseCatalog, CourseMetadata


class CheckoutValidationError(ValueError):
    """Error de validación de negocio en el flujo de compra."""


class InvalidCourseIdError(CheckoutValidationError):
    pass


class CourseNotFoundError(CheckoutValidationError):
    pass


class AlreadyPurchasedError(CheckoutValidationError):
    pass


def validate_course_id(course_id: int) -> None:
    if course_id <= 0:
        raise InvalidCourseIdError("Invalid course ID")


def load_purchasable_course(catalog: CourseCatalog, course_id: int) -> CourseMetadata:
    """Metadatos del curso; requiere directorio de contenido y entrada en config."""
    validate_course_id(course_id)
    if not catalog.course_exists(course_id):
        raise CourseNotFoundError("Course not found")
    meta = catalog.load_metadata(course_id)
    if meta is None:
        raise CourseNotFoundError("Course not found")
    return meta


async def ensure_not_purchased(
    session: AsyncSession,
    entitlements: EntitlementRepository,
    *,
    user_id: int,
    course_id: int,
) -> None:
    if await entitlements.exists(session, user_id, course_id):
        raise AlreadyPurchasedError("Course already purchased")


__all__ = [
    "CheckoutValidationError",
    "InvalidCourseIdError",
    "CourseNotFoundError",
    "AlreadyPurchasedError",
    "validate_course_id",
    "load_purchasable_course",
    "ensure_not_purchased",
]

# Fin del archivo app/modules/payments/facades/checkout/validators.py
