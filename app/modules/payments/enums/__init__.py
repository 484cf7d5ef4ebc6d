# -*- coding: utf-8 -*-
"""
app/modules/payments/enums/__init__.py

Superficie de exportación de enums del módulo Payments.

Incluye:
- TransactionStatus
- TransactionType
- PayPalEventType

Autor: CourseHub
Fecha: 19/10/2026
"""

from .transaction_status_enum import TransactionStatus
from .transaction_type_enum import TransactionType
from .paypal_event_type_enum import PayPalEventType

__all__ = [
    "TransactionStatus",
    "TransactionType",
    "PayPalEventType",
]

# Fin del archivo app/modules/payments/enums/__init__.py
