# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/webhooks/context.py

Dependencias compartidas por los handlers de webhook y resultado tipado
de cada handler.

Autor: CourseHub
Fecha: 19/10/2026
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.modules.courses.repositories.entitlement_repository import EntitlementRepository
from app.modules.courses.services.course_catalog import CourseCatalog
from app.modules.notifications.services.telegram_notifier import TelegramNotifier
from app.modules.payments.repositories.transaction_repository import TransactionRepository
from app.modules.payments.services.paypal_client import PayPalClient


class WebhookOutcome(StrEnum):
    GRANTED = "granted"
    DUPLICATE = "duplicate"
    RECORDED = "recorded"
    REVOKED = "revoked"
    INVALID_CUSTOM_ID = "invalid_custom_id"
    COURSE_NOT_FOUND = "course_not_found"
    USER_NOT_FOUND = "user_not_found"
    CAPTURE_FAILED = "capture_failed"
    IGNORED = "ignored"


@dataclass(frozen=True)
class WebhookResult:
    outcome: WebhookOutcome
    user_id: Optional[int] = None
    course_id: Optional[int] = None
    detail: Optional[str] = None


@dataclass
class WebhookContext:
    session_factory: async_sessionmaker[AsyncSession]
    catalog: CourseCatalog
    paypal: PayPalClient
    notifier: TelegramNotifier
    entitlements: EntitlementRepository = field(default_factory=EntitlementRepository)
    transactions: TransactionRepository = field(default_factory=TransactionRepository)


__all__ = ["WebhookOutcome", "WebhookResult", "WebhookContext"]

# Fin del archivo app/modules/payments/facades/webhooks/context.py
