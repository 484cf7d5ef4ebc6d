# -*- coding: utf-8 -*-
"""
app/modules/payments/__init__.py

Módulo de pagos de CourseHub.

Este módulo gestiona:
- Órdenes de compra de cursos en PayPal
- Transacciones (pending/success/failed/refunded)
- Webhooks de PayPal y otorgamiento/revocación de accesos

Estructura:
- enums: estados y tipos de transacción, tipos de evento PayPal
- models: modelos ORM (Transaction)
- repositories: acceso a datos
- services: cliente REST de PayPal
- facades: funciones de alto nivel (checkout, webhooks)
- routes: endpoints HTTP

Autor: CourseHub
Fecha: 19/10/2026
"""

from .enums import PayPalEventType, TransactionStatus, TransactionType
from .models import Transaction

__all__ = [
    "PayPalEventType",
    "TransactionStatus",
    "TransactionType",
    "Transaction",
]

# Fin del archivo app/modules/payments/__init__.py
