# -*- coding: utf-8 -*-
"""
app/modules/payments/routes/__init__.py

Ensamblador de rutas REST del módulo Payments.

Incluye:
- /purchase/create
- /webhooks/paypal
- /webhooks/paypal/test
- /user/transactions

Autor: CourseHub
Fecha: 19/10/2026
"""

from fastapi import APIRouter

from .purchase import router as purchase_router
from .webhooks_paypal import router as webhooks_paypal_router
from .transactions import router as transactions_router

router = APIRouter()

router.include_router(purchase_router)
router.include_router(webhooks_paypal_router)
router.include_router(transactions_router)

__all__ = ["router"]

# Fin del archivo app/modules/payments/routes/__init__.py
