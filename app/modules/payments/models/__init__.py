# -*- coding: utf-8 -*-
"""
app/modules/payments/models/__init__.py

Modelos ORM del módulo Payments.
"""

from .transaction_models import Transaction

__all__ = ["Transaction"]
