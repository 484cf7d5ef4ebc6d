# -*- coding: utf-8 -*-
"""
app/__init__.py

Paquete principal del backend de CourseHub.

Autor: CourseHub
Fecha: 19/10/2026
"""

# Fin del archivo app/__init__.py
