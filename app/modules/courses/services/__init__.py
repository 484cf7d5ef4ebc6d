# -*- coding: utf-8 -*-
"""
app/modules/courses/services/__init__.py
"""

from .course_catalog import (
    CourseMetadata,
    CourseCatalog,
    get_course_catalog,
    set_course_catalog,
    resolve_paypal_currency,
)

__all__ = [
    "CourseMetadata",
    "CourseCatalog",
    "get_course_catalog",
    "set_course_catalog",
    "resolve_paypal_currency",
]
