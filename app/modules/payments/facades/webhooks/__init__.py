# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/webhooks/__init__.py

Exporta las funciones clave de facades/webhooks.

Autor: CourseHub
Fecha: 19/10/2026
"""

from .context import WebhookContext, WebhookOutcome, WebhookResult
from .custom_id import CustomId, build_custom_id, parse_custom_id
from .normalize import PayPalWebhookEvent, WebhookNormalizationError, parse_webhook_event
from .verify import (
    VerificationMode,
    WebhookSignatureError,
    WebhookVerificationNotConfigured,
    verify_paypal_webhook,
)
from .capture_completed import handle_capture_completed
from .capture_denied import handle_capture_denied
from .capture_refunded import handle_capture_refunded
from .order_approved import handle_order_approved
from .handler import EVENT_HANDLERS, dispatch_webhook_event, process_paypal_webhook, route_event

__all__ = [
    "WebhookContext",
    "WebhookOutcome",
    "WebhookResult",
    "CustomId",
    "build_custom_id",
    "parse_custom_id",
    "PayPalWebhookEvent",
    "WebhookNormalizationError",
    "parse_webhook_event",
    "VerificationMode",
    "WebhookSignatureError",
    "WebhookVerificationNotConfigured",
    "verify_paypal_webhook",
    "handle_capture_completed",
    "handle_capture_denied",
    "handle_capture_refunded",
    "handle_order_approved",
    "EVENT_HANDLERS",
    "dispatch_webhook_event",
    "process_paypal_webhook",
    "route_event",
]

# Fin del archivo app/modules/payments/facades/webhooks/__init__.py
