# -*- coding: utf-8 -*-
"""
app/modules/notifications/services/__init__.py
"""

from .telegram_notifier import (
    TelegramNotifier,
    TelegramNotificationError,
    NotificationTarget,
    get_telegram_notifier,
    set_telegram_notifier,
    close_telegram_notifier,
)

__all__ = [
    "TelegramNotifier",
    "TelegramNotificationError",
    "NotificationTarget",
    "get_telegram_notifier",
    "set_telegram_notifier",
    "close_telegram_notifier",
]
