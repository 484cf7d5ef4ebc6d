# -*- coding: utf-8 -*-
"""
app/shared/database/repository.py

Repositorio base para operaciones async con SQLAlchemy.

Autor: CourseHub
Fecha: 19/10/2026
"""

from typing import Any, Type, TypeVar, Generic, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")  # modelo ORM


class BaseRepository(Generic[T]):
    """Repositorio asincrónico base para CRUD común."""

    def __init__(self, model: Type[T]):
        self.model = model

    async def get(self, session: AsyncSession, obj_id: Any) -> Optional[T]:
        return await session.get(self.model, obj_id)

    async def create(self, session: AsyncSession, **kwargs) -> T:
        obj = self.model(**kwargs)
        session.add(obj)
        await session.flush()
        return obj

    async def insert_if_absent(self, session: AsyncSession, **kwargs) -> Optional[T]:
        """
        Inserta dentro de un SAVEPOINT.

        Devuelve la fila creada, o None si una restricción UNIQUE ya la
        contenía. La transacción externa sigue utilizable en ambos casos.
        """
        obj = self.model(**kwargs)
        try:
            async with session.begin_nested():
                session.add(obj)
                await session.flush()
        except IntegrityError:
            return None
        return obj

# Fin del archivo app/shared/database/repository.py
