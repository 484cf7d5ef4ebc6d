# -*- coding: utf-8 -*-
"""
app/modules/payments/services/__init__.py

Cliente de la API REST de PayPal.
"""

from .paypal_client import (
    PayPalAPIError,
    PayPalCapture,
    PayPalClient,
    PayPalOrder,
    close_paypal_client,
    get_paypal_client,
    set_paypal_client,
)

__all__ = [
    "PayPalAPIError",
    "PayPalCapture",
    "PayPalClient",
    "PayPalOrder",
    "close_paypal_client",
    "get_paypal_client",
    "set_paypal_client",
]
