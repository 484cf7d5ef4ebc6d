# -*- coding: utf-8 -*-
"""
app/modules/courses/repositories/__init__.py
"""

from .entitlement_repository import EntitlementRepository

__all__ = ["EntitlementRepository"]
