# -*- coding: utf-8 -*-
"""
app/modules/courses/schemas/user_course_schemas.py

Esquemas de "Mis cursos" y del toggle de favorito.

Autor: CourseHub
Fecha: 19/10/2026
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class UserCourseOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    author: str
    price: str
    currency: str
    category: str = "General"
    image: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[str] = None
    is_favorite: bool = Field(alias="isFavorite")
    purchased_at: Optional[str] = Field(default=None, alias="purchasedAt")


class UserCourseListResponse(BaseModel):
    success: bool = True
    data: List[UserCourseOut]


class FavoriteState(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_favorite: bool = Field(alias="isFavorite")


class FavoriteToggleResponse(BaseModel):
    success: bool = True
    data: FavoriteState


__all__ = [
    "UserCourseOut",
    "UserCourseListResponse",
    "FavoriteState",
    "FavoriteToggleResponse",
]

# Fin del archivo app/modules/courses/schemas/user_course_schemas.py
