# -*- coding: utf-8 -*-
"""
app/modules/payments/metrics/routes/routes_prometheus.py

Rutas Prometheus:
- /metrics        → Export en formato Prometheus
- /metrics/ping   → Health simple del exporter

Autor: CourseHub
Fecha: 19/10/2026
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter
from starlette.responses import PlainTextResponse

from ..exporters.prometheus_exporter import (
    CONTENT_TYPE_LATEST,
    prometheus_ping,
    render_prometheus_metrics,
)

router_prometheus = APIRouter(tags=["metrics"])


@router_prometheus.get("/metrics", response_class=PlainTextResponse)
async def prometheus_metrics() -> PlainTextResponse:
    """Devuelve las métricas en formato Prometheus para scraping."""
    return PlainTextResponse(render_prometheus_metrics(), media_type=CONTENT_TYPE_LATEST)


@router_prometheus.get("/metrics/ping")
async def ping() -> Dict[str, Any]:
    return prometheus_ping()

# Fin del archivo app/modules/payments/metrics/routes/routes_prometheus.py
