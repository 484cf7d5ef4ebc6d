# -*- coding: utf-8 -*-
"""
app/modules/payments/metrics/__init__.py

Métricas Prometheus del flujo de compras y webhooks.

Autor: CourseHub
Fecha: 19/10/2026
"""

from .exporters.prometheus_exporter import (
    observe_access_change,
    observe_order_created,
    observe_order_failed,
    observe_webhook_outcome,
    observe_webhook_received,
    observe_webhook_verified,
    registry,
    render_prometheus_metrics,
)

__all__ = [
    "registry",
    "render_prometheus_metrics",
    "observe_order_created",
    "observe_order_failed",
    "observe_webhook_received",
    "observe_webhook_verified",
    "observe_webhook_outcome",
    "observe_access_change",
]

# Fin del archivo app/modules/payments/metrics/__init__.py
