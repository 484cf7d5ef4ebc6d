# -*- coding: utf-8 -*-
"""
app/modules/courses/routes/user_courses.py

Cursos del usuario autenticado.

Endpoints:
- GET /user/courses                    (caché 300 s en user:<id>:courses)
- PUT /user/courses/{course_id}/favorite

La lista cacheada es la vista que el webhook de pagos invalida al
otorgar o revocar un acceso.

Autor: CourseHub
Fecha: 19/10/2026
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.auth.dependencies import get_current_user
from app.modules.auth.schemas.user_schemas import CurrentUser
from app.modules.courses.repositories.entitlement_repository import EntitlementRepository
from app.modules.courses.schemas import (
    FavoriteState,
    FavoriteToggleResponse,
    UserCourseListResponse,
    UserCourseOut,
)
from app.modules.courses.services.course_catalog import CourseCatalog, get_course_catalog
from app.shared.cache import CacheKeys, cache_delete, cache_get_json, cache_set_json
from app.shared.database import get_db
from app.shared.utils.currency import format_amount
from app.shared.utils.http_exceptions import BadRequestException

logger = logging.getLogger(__name__)

USER_COURSES_CACHE_TTL = 300

router = APIRouter(
    prefix="/user/courses",
    tags=["courses:user"],
)


@router.get("", response_model=UserCourseListResponse)
async def list_user_courses(
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
    catalog: CourseCatalog = Depends(get_course_catalog),
) -> UserCourseListResponse:
    """Cursos comprados, más recientes primero; se omiten los que ya no están en el catálogo."""
    cache_key = CacheKeys.user_courses(user.id)
    cached = await cache_get_json(cache_key)
    if isinstance(cached, list):
        return UserCourseListResponse(data=[UserCourseOut.model_validate(item) for item in cached])

    rows = await EntitlementRepository().list_by_user(session, user.id)
    courses = []
    for row in rows:
        meta = catalog.load_metadata(row.course_id)
        if meta is None:
            logger.warning(f"Curso {row.course_id} de user {user.id} sin metadatos; se omite")
            continue
        courses.append(
            UserCourseOut(
                id=meta.course_id,
                title=meta.title,
                author=meta.author,
                price=format_amount(meta.price),
                currency=meta.currency,
                category=meta.category or "General",
                image=meta.image_url,
                description=meta.description,
                duration=meta.duration,
                is_favorite=row.is_favorite,
                purchased_at=row.purchased_at.isoformat() if row.purchased_at else None,
            )
        )

    await cache_set_json(
        cache_key,
        [c.model_dump(by_alias=True) for c in courses],
        ttl_seconds=USER_COURSES_CACHE_TTL,
    )
    return UserCourseListResponse(data=courses)


@router.put("/{course_id}/favorite", response_model=FavoriteToggleResponse)
async def toggle_favorite(
    course_id: str,
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> FavoriteToggleResponse:
    """Invierte el favorito; si el usuario no posee el curso responde isFavorite=false."""
    if not course_id.isdigit():
        raise BadRequestException("Invalid course ID")

    state = await EntitlementRepository().toggle_favorite(session, user.id, int(course_id))
    await session.commit()
    await cache_delete(CacheKeys.user_courses(user.id))

    return FavoriteToggleResponse(data=FavoriteState(is_favorite=bool(state)))


__all__ = ["router"]

# Fin del archivo app/modules/courses/routes/user_courses.py
