# -*- coding: utf-8 -*-
"""
app/modules/courses/__init__.py

Catálogo de cursos y propiedad (user_courses).
"""
