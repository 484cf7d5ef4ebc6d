# -*- coding: utf-8 -*-
"""
app/shared/utils/best_effort.py

Ejecución best-effort de efectos secundarios (notificaciones, caché).

Un fallo aquí no debe revertir ni abortar la operación principal: se
registra con contexto y se devuelve como BestEffortResult, de modo que
el llamador decide si le interesa el resultado.

Autor: CourseHub
Fecha: 19/10/2026
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class BestEffortResult(Generic[T]):
    ok: bool
    value: Optional[T] = None
    error: Optional[str] = None


async def run_best_effort(
    awaitable: Awaitable[T],
    *,
    label: str,
    log: Optional[logging.Logger] = None,
) -> BestEffortResult[T]:
    """Await `awaitable`; cualquier excepción se loguea y se encapsula."""
    log = log or logger
    try:
        value = await awaitable
    except Exception as e:  # noqa: BLE001
        log.warning(f"[best_effort] {label} falló: {type(e).__name__}: {e}")
        return BestEffortResult(ok=False, error=f"{type(e).__name__}: {e}")
    return BestEffortResult(ok=True, value=value)


__all__ = ["BestEffortResult", "run_best_effort"]
# Fin del archivo app/shared/utils/best_effort.py
