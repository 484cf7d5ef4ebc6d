# -*- coding: utf-8 -*-
"""
app/modules/auth/repositories/user_repository.py

Repositorio de acceso a datos para User (usuarios de la Mini App).
Encapsula lecturas por id / telegram_id y el alta idempotente a partir
del payload de Telegram.

Autor: CourseHub
Fecha: 19/10/2026
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.auth.models.user_models import User
from app.modules.auth.schemas.user_schemas import TelegramUserPayload


class UserRepository:
    """Repositorio de usuarios."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def get_by_id(self, user_id: int) -> Optional[User]:
        stmt = select(User).where(User.id == user_id)
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_telegram_id(self, telegram_id: int) -> Optional[User]:
        stmt = select(User).where(User.telegram_id == telegram_id)
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_or_create(self, payload: TelegramUserPayload) -> User:
        """
        Devuelve el usuario del telegram_id dado, creándolo si no existe.

        El alta va en un SAVEPOINT: si otra petición concurrente ya lo
        insertó, se relee la fila existente.
        """
        existing = await self.get_by_telegram_id(payload.id)
        if existing is not None:
            return existing

        user = User(
            telegram_id=payload.id,
            username=payload.username,
            first_name=payload.first_name,
            last_name=payload.last_name,
            photo_url=payload.photo_url,
            language_code=payload.language_code,
            notifications_enabled=True,
            has_started=True,
        )
        try:
            async with self._db.begin_nested():
                self._db.add(user)
                await self._db.flush()
        except IntegrityError:
            existing = await self.get_by_telegram_id(payload.id)
            if existing is None:
                raise
            return existing
        return user


__all__ = ["UserRepository"]
# Fin del archivo app/modules/auth/repositories/user_repository.py
