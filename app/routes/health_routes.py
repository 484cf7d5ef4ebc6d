# -*- coding: utf-8 -*-
"""
app/routes/health_routes.py

Endpoints de health check del backend.

Autor: CourseHub
Fecha: 19/10/2026
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from app.shared.config import get_settings
from app.shared.database import check_database_health

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    summary="Health check del backend",
    description="Estado básico del backend y conectividad con la base de datos.",
)
async def health_check() -> dict:
    settings = get_settings()

    db_ok = await check_database_health()

    return {
        "status": "ok" if db_ok else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.python_env,
        "database": {
            "reachable": db_ok,
        },
        "service": {
            "name": settings.app_name,
            "version": settings.app_version,
        },
    }


@router.get("/api/health/live")
async def health_live() -> dict:
    return {"live": True}


# Fin del archivo app/routes/health_routes.py
