# -*- coding: utf-8 -*-
"""
app/routes/master_routes.py

Router maestro con dos capas:
  - /api/...  (API de la Mini App y webhooks)
  - rutas públicas sin prefijo (health, métricas)

Autor: CourseHub
Fecha: 19/10/2026
"""
from __future__ import annotations

import logging

from fastapi import APIRouter

from app.modules.courses.routes import router as courses_router
from app.modules.payments.metrics.routes import router_prometheus
from app.modules.payments.routes import router as payments_router

logger = logging.getLogger(__name__)

# Capas principales
api = APIRouter(prefix="/api")
public = APIRouter(prefix="")  # sin prefijo


def _include(target: APIRouter, router: APIRouter, name: str) -> None:
    """Incluye un router en la capa dada y registra trazabilidad en logs."""
    target.include_router(router)
    logger.debug(
        "Router '%s' montado en prefix '%s'",
        name,
        target.prefix or "/",
    )


_include(api, payments_router, "payments")
_include(api, courses_router, "courses")
_include(public, router_prometheus, "metrics")


__all__ = ["api", "public"]

# Fin del archivo app/routes/master_routes.py
