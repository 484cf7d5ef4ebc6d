# -*- coding: utf-8 -*-
"""
app/modules/auth/schemas/__init__.py
"""

from .user_schemas import TelegramUserPayload, CurrentUser

__all__ = ["TelegramUserPayload", "CurrentUser"]
