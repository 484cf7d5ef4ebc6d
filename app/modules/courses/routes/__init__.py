# -*- coding: utf-8 -*-
"""
app/modules/courses/routes/__init__.py

Ensamblador de rutas del módulo Courses.

Autor: CourseHub
Fecha: 19/10/2026
"""

from fastapi import APIRouter

from .user_courses import router as user_courses_router

router = APIRouter()
router.include_router(user_courses_router)

__all__ = ["router"]

# Fin del archivo app/modules/courses/routes/__init__.py
