# -*- coding: utf-8 -*-
"""
app/modules/payments/repositories/__init__.py

Repositorios del módulo de pagos.

Autor: CourseHub
Fecha: 19/10/2026
"""

from .transaction_repository import ReconcileOutcome, ReconcileResult, TransactionRepository

__all__ = ["TransactionRepository", "ReconcileOutcome", "ReconcileResult"]

# Fin del archivo app/modules/payments/repositories/__init__.py
