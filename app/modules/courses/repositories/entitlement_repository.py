# -*- coding: utf-8 -*-
"""
app/modules/courses/repositories/entitlement_repository.py

Repositorio de propiedad de cursos (tabla user_courses).

Responsabilidades:
- Consulta de propiedad (user, course)
- Alta idempotente: SAVEPOINT + UNIQUE(user_id, course_id)
- Revocación idempotente (reembolsos)
- Listado y favorito para la vista "Mis cursos"

Autor: CourseHub
Fecha: 19/10/2026
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.courses.models.user_course_models import UserCourse
from app.shared.database.repository import BaseRepository

logger = logging.getLogger(__name__)


class EntitlementRepository(BaseRepository[UserCourse]):
    def __init__(self) -> None:
        super().__init__(UserCourse)

    async def find(self, session: AsyncSession, user_id: int, course_id: int) -> Optional[UserCourse]:
        stmt = select(UserCourse).where(
            UserCourse.user_id == user_id,
            UserCourse.course_id == course_id,
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def exists(self, session: AsyncSession, user_id: int, course_id: int) -> bool:
        return await self.find(session, user_id, course_id) is not None

    async def grant_if_absent(self, session: AsyncSession, user_id: int, course_id: int) -> bool:
        """
        Inserta la propiedad si no existe.

        Returns:
            True si esta llamada creó la fila; False si ya existía
            (incluido el caso de una inserción concurrente que ganó la carrera).
        """
        created = await self.insert_if_absent(session, user_id=user_id, course_id=course_id)
        if created is None:
            logger.info(f"[entitlement] user={user_id} course={course_id} ya tenía acceso (UNIQUE)")
            return False
        return True

    async def revoke(self, session: AsyncSession, user_id: int, course_id: int) -> int:
        """Elimina la propiedad; devuelve filas borradas (0 si no existía)."""
        stmt = delete(UserCourse).where(
            UserCourse.user_id == user_id,
            UserCourse.course_id == course_id,
        )
        result = await session.execute(stmt)
        return result.rowcount or 0

    async def list_by_user(self, session: AsyncSession, user_id: int) -> Sequence[UserCourse]:
        stmt = (
            select(UserCourse)
            .where(UserCourse.user_id == user_id)
            .order_by(UserCourse.purchased_at.desc(), UserCourse.id.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def toggle_favorite(self, session: AsyncSession, user_id: int, course_id: int) -> Optional[bool]:
        """Invierte is_favorite. None si el usuario no posee el curso."""
        row = await self.find(session, user_id, course_id)
        if row is None:
            return None
        row.is_favorite = not row.is_favorite
        await session.flush()
        return row.is_favorite


__all__ = ["EntitlementRepository"]
# Fin del archivo app/modules/courses/repositories/entitlement_repository.py
