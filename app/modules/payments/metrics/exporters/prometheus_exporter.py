# -*- coding: utf-8 -*-
"""
app/modules/payments/metrics/exporters/prometheus_exporter.py

Exporter Prometheus para el módulo de pagos.
Registro propio (no el global de prometheus_client) con contadores de
órdenes, webhooks y accesos otorgados/revocados.

Autor: CourseHub
Fecha: 19/10/2026
"""

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
    CONTENT_TYPE_LATEST,
)
import logging
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------
# Registro de Prometheus
# --------------------------------------------------------------------------
registry = CollectorRegistry()

# --------------------------------------------------------------------------
# Definición de métricas
# --------------------------------------------------------------------------

ORDERS_CREATED_TOTAL = Counter(
    "payments_orders_created_total",
    "Órdenes PayPal creadas",
    ["currency"],
    registry=registry,
)
ORDERS_FAILED_TOTAL = Counter(
    "payments_orders_failed_total",
    "Creación de órdenes fallida por razón",
    ["reason"],  # not_found/already_purchased/provider_error
    registry=registry,
)

WEBHOOKS_RECEIVED_TOTAL = Counter(
    "payments_webhook_received_total",
    "Webhooks recibidos por tipo de evento",
    ["event_type"],
    registry=registry,
)
WEBHOOKS_VERIFIED_TOTAL = Counter(
    "payments_webhook_verified_total",
    "Webhooks por resultado de verificación",
    ["result"],  # verified/skipped_dev/invalid_signature/not_configured
    registry=registry,
)
WEBHOOKS_OUTCOME_TOTAL = Counter(
    "payments_webhook_outcome_total",
    "Webhooks por outcome de negocio",
    ["event_type", "outcome"],
    registry=registry,
)
WEBHOOKS_PROCESSING_SECONDS = Histogram(
    "payments_webhook_processing_seconds",
    "Tiempo de procesamiento de webhooks (segundos)",
    ["event_type"],
    registry=registry,
)

ACCESS_CHANGES_TOTAL = Counter(
    "payments_access_changes_total",
    "Accesos a cursos otorgados / revocados",
    ["action"],  # granted/duplicate/revoked
    registry=registry,
)


# --------------------------------------------------------------------------
# Funciones auxiliares
# --------------------------------------------------------------------------
def render_prometheus_metrics() -> bytes:
    """Salida actual de las métricas en formato Prometheus."""
    return generate_latest(registry)


def observe_order_created(currency: str) -> None:
    ORDERS_CREATED_TOTAL.labels(currency=currency).inc()


def observe_order_failed(reason: str) -> None:
    ORDERS_FAILED_TOTAL.labels(reason=reason).inc()


def observe_webhook_received(event_type: str) -> None:
    WEBHOOKS_RECEIVED_TOTAL.labels(event_type=event_type or "unknown").inc()


def observe_webhook_verified(result: str) -> None:
    WEBHOOKS_VERIFIED_TOTAL.labels(result=result).inc()
    logger.debug(f"[Prometheus] Webhook verified={result}")


def observe_webhook_outcome(event_type: str, outcome: str, duration: float) -> None:
    """
    Args:
        event_type: tipo de evento PayPal (o "unknown")
        outcome: granted/duplicate/ignored/recorded/error
        duration: tiempo de procesamiento en segundos
    """
    WEBHOOKS_OUTCOME_TOTAL.labels(event_type=event_type or "unknown", outcome=outcome).inc()
    WEBHOOKS_PROCESSING_SECONDS.labels(event_type=event_type or "unknown").observe(duration)
    logger.debug(f"[Prometheus] Webhook {event_type} outcome={outcome} duration={duration:.4f}s")


def observe_access_change(action: str) -> None:
    ACCESS_CHANGES_TOTAL.labels(action=action).inc()


def prometheus_ping() -> dict:
    return {
        "status": "ok",
        "service": "payments-metrics",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


__all__ = [
    "registry",
    "CONTENT_TYPE_LATEST",
    "render_prometheus_metrics",
    "observe_order_created",
    "observe_order_failed",
    "observe_webhook_received",
    "observe_webhook_verified",
    "observe_webhook_outcome",
    "observe_access_change",
    "prometheus_ping",
]

# Fin del archivo app/modules/payments/metrics/exporters/prometheus_exporter.py
