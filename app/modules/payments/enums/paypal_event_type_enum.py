# -*- coding: utf-8 -*-
"""
app/modules/payments/enums/paypal_event_type_enum.py

Tipos de evento webhook de PayPal que el sistema procesa.

Cualquier otro event_type se registra y se ignora. Todo miembro de este
enum debe tener handler en la tabla de ruteo del dispatcher (hay un test
que lo verifica).

Autor: CourseHub
Fecha: 19/10/2026
"""

from __future__ import annotations

from enum import StrEnum
from typing import Optional


class PayPalEventType(StrEnum):
    CAPTURE_COMPLETED = "PAYMENT.CAPTURE.COMPLETED"
    CAPTURE_DENIED = "PAYMENT.CAPTURE.DENIED"
    CAPTURE_REFUNDED = "PAYMENT.CAPTURE.REFUNDED"
    ORDER_APPROVED = "CHECKOUT.ORDER.APPROVED"

    @classmethod
    def parse(cls, value: object) -> Optional["PayPalEventType"]:
        """Devuelve el miembro correspondiente o None si es desconocido."""
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip())
        except ValueError:
            return None


__all__ = ["PayPalEventType"]

# Fin del archivo app/modules/payments/enums/paypal_event_type_enum.py
