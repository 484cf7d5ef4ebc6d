# -*- coding: utf-8 -*-
"""
app/modules/notifications/__init__.py

Avisos al usuario por Telegram.
"""
