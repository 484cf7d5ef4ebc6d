# -*- coding: utf-8 -*-
"""
app/modules/auth/models/__init__.py

Modelos ORM del módulo de autenticación.

Autor: CourseHub
Fecha: 19/10/2026
"""

from .user_models import User

__all__ = ["User"]
