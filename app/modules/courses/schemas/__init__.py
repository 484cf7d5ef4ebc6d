# -*- coding: utf-8 -*-
"""
app/modules/courses/schemas/__init__.py
"""

from .user_course_schemas import (
    FavoriteState,
    FavoriteToggleResponse,
    UserCourseListResponse,
    UserCourseOut,
)

__all__ = [
    "UserCourseOut",
    "UserCourseListResponse",
    "FavoriteState",
    "FavoriteToggleResponse",
]
