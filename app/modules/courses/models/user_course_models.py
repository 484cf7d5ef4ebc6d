# -*- coding: utf-8 -*-
"""
app/modules/courses/models/user_course_models.py

Tabla user_courses: un usuario es dueño de un curso.

La restricción UNIQUE(user_id, course_id) hace que el alta concurrente
de la misma propiedad termine en IntegrityError, que el repositorio
interpreta como "acceso ya otorgado".

Autor: CourseHub
Fecha: 19/10/2026
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base


class UserCourse(Base):
    __tablename__ = "user_courses"
    __table_args__ = (
        UniqueConstraint("user_id", "course_id", name="uq_user_courses_user_course"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    course_id: Mapped[int] = mapped_column(Integer, nullable=False)
    is_favorite: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="0")
    purchased_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:  # pragma: no cover
        return f"<UserCourse user_id={self.user_id} course_id={self.course_id}>"


__all__ = ["UserCourse"]
# Fin del archivo app/modules/courses/models/user_course_models.py
