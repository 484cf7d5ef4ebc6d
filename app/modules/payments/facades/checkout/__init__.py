# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/checkout/__init__.py

Punto de entrada del submódulo de compra del módulo Payments.

Autor: CourseHub
Fecha: 19/10/2026
"""

from .dto import CreatePurchaseRequest, CreatePurchaseResponse, PurchaseOrderData
from .validators import (
    AlreadyPurchasedError,
    CheckoutValidationError,
    CourseNotFoundError,
    InvalidCourseIdError,
)
from .create_order import create_purchase_order

__all__ = [
    "CreatePurchaseRequest",
    "CreatePurchaseResponse",
    "PurchaseOrderData",
    "CheckoutValidationError",
    "InvalidCourseIdError",
    "CourseNotFoundError",
    "AlreadyPurchasedError",
    "create_purchase_order",
]

# Fin del archivo app/modules/payments/facades/checkout/__init__.py
