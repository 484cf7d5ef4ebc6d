# -*- coding: utf-8 -*-
"""
app/modules/payments/metrics/routes/__init__.py

Router de métricas Prometheus.

Autor: CourseHub
Fecha: 19/10/2026
"""

from .routes_prometheus import router_prometheus

router = router_prometheus

__all__ = ["router_prometheus", "router"]

# Fin del archivo app/modules/payments/metrics/routes/__init__.py
