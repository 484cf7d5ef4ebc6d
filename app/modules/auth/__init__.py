# -*- coding: utf-8 -*-
"""
app/modules/auth/__init__.py

Módulo de autenticación: usuarios de Telegram e initData.
"""
