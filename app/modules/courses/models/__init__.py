# -*- coding: utf-8 -*-
"""
app/modules/courses/models/__init__.py
"""

from .user_course_models import UserCourse

__all__ = ["UserCourse"]
