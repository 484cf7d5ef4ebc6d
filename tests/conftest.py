# tests/conftest.py
# -*- coding: utf-8 -*-
"""
Config global de tests para CourseHub.

- PYTHON_ENV=test y SQLite en memoria (aiosqlite, StaticPool) por test
- Catálogo temporal: directorio de cursos + config.yaml
- Dobles de PayPal y Telegram que registran llamadas
- App FastAPI con cliente httpx (ASGITransport + asgi-lifespan)
- Reset de singletons (settings, catálogo, clientes, replay guard)
"""

import json
import os
import time
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Any, Optional
from urllib.parse import urlencode

# -----------------------------------------------------------------------------
# 0) Entorno mínimo ANTES de importar la app
# -----------------------------------------------------------------------------
os.environ["PYTHON_ENV"] = "test"
os.environ.setdefault("TELEGRAM_BOT_TOKEN", "123456:TEST-TOKEN")
os.environ.pop("REDIS_URL", None)
os.environ.pop("PAYPAL_WEBHOOK_ID", None)

import pytest
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient

from app.modules.auth.models.user_models import User
from app.modules.auth.services.init_data_service import replay_guard, sign_init_data
from app.modules.courses.services.course_catalog import CourseCatalog, set_course_catalog
from app.modules.notifications.services.telegram_notifier import set_telegram_notifier
from app.modules.payments.facades.webhooks import WebhookContext
from app.modules.payments.services.paypal_client import (
    PayPalAPIError,
    PayPalCapture,
    PayPalOrder,
    set_paypal_client,
)
from app.shared.config import get_settings
from app.shared.config.app_config import reset_app_config_cache
from app.shared.config.settings_payments import reset_payments_settings
from app.shared.database import build_engine, build_sessionmaker, dispose_engine, init_models, set_engine
from app.shared.redis import RedisClientManager
from app.shared.utils.currency import format_amount

TEST_BOT_TOKEN = os.environ["TELEGRAM_BOT_TOKEN"]

CONFIG_YAML = """
app:
  name: CourseHub
  defaultCurrency: usd
payments:
  paypal:
    enabled: true
    currency: EUR
authors:
  - id: ana
    name: Ana Pérez
    avatarUrl: https://example.com/ana.png
courses:
  - id: 7
    title: Python desde cero
    authorId: ana
    price: 19.99
    currency: USD
    category: Programación
  - id: 8
    title: Álgebra lineal
    author: Luis
    price: 10
  - id: 9
    title: Curso sin carpeta
    author: Luis
    price: 5
"""


# -----------------------------------------------------------------------------
# 1) Singletons limpios por test
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def reset_singletons():
    get_settings.cache_clear()
    reset_payments_settings()
    reset_app_config_cache()
    RedisClientManager.reset_instance()
    replay_guard.clear()
    set_course_catalog(None)
    set_paypal_client(None)
    set_telegram_notifier(None)
    yield
    get_settings.cache_clear()
    reset_payments_settings()
    reset_app_config_cache()
    RedisClientManager.reset_instance()
    replay_guard.clear()
    set_course_catalog(None)
    set_paypal_client(None)
    set_telegram_notifier(None)


# -----------------------------------------------------------------------------
# 2) Base de datos
# -----------------------------------------------------------------------------
@pytest.fixture
async def engine():
    eng = build_engine("sqlite+aiosqlite:///:memory:")
    await init_models(eng)
    set_engine(eng)
    yield eng
    await dispose_engine()


@pytest.fixture
def session_factory(engine):
    return build_sessionmaker(engine)


@pytest.fixture
async def db(session_factory) -> AsyncIterator:
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_user(session_factory):
    async def _make(user_id: int, telegram_id: Optional[int] = None, **kwargs) -> User:
        # Columnas opcionales explícitas: el objeto se usa ya desacoplado de la sesión
        for column in ("username", "last_name", "photo_url", "language_code"):
            kwargs.setdefault(column, None)
        async with session_factory() as session:
            user = User(
                id=user_id,
                telegram_id=telegram_id or user_id * 100,
                first_name=kwargs.pop("first_name", f"user{user_id}"),
                notifications_enabled=kwargs.pop("notifications_enabled", True),
                has_started=True,
                **kwargs,
            )
            session.add(user)
            await session.commit()
            return user

    return _make


# -----------------------------------------------------------------------------
# 3) Catálogo temporal
# -----------------------------------------------------------------------------
@pytest.fixture
def catalog_paths(tmp_path):
    courses_dir = tmp_path / "courses"
    for course_id in (7, 8):
        (courses_dir / str(course_id)).mkdir(parents=True)
    config_path = tmp_path / "config.yaml"
    config_path.write_text(CONFIG_YAML, encoding="utf-8")
    return courses_dir, config_path


@pytest.fixture
def catalog(catalog_paths) -> CourseCatalog:
    courses_dir, config_path = catalog_paths
    cat = CourseCatalog(courses_dir=str(courses_dir), config_path=str(config_path))
    set_course_catalog(cat)
    return cat


# -----------------------------------------------------------------------------
# 4) Dobles de PayPal y Telegram
# -----------------------------------------------------------------------------
class FakePayPal:
    """Registra llamadas; el comportamiento se ajusta por atributos."""

    def __init__(self) -> None:
        self.orders: list[dict[str, Any]] = []
        self.captured: list[str] = []
        self.verifications: list[dict[str, Any]] = []
        self.order_id = "ORDER1"
        self.capture: Optional[PayPalCapture] = None
        self.fail_create: bool = False
        self.fail_capture: bool = False
        self.signature_valid: bool = True
        self.closed = False

    async def create_order(self, *, amount, currency, description, custom_id, return_url, cancel_url):
        if self.fail_create:
            raise PayPalAPIError("create_order: HTTP 500", status_code=500, operation="create_order")
        self.orders.append(
            {
                "amount": amount,
                "currency": currency,
                "description": description,
                "custom_id": custom_id,
                "return_url": return_url,
                "cancel_url": cancel_url,
            }
        )
        return PayPalOrder(
            order_id=self.order_id,
            approve_url=f"https://www.sandbox.paypal.com/checkoutnow?token={self.order_id}",
            amount=format_amount(amount),
            currency=currency,
        )

    async def capture_order(self, order_id: str) -> PayPalCapture:
        self.captured.append(order_id)
        if self.fail_capture:
            raise PayPalAPIError("capture_order: HTTP 422", status_code=422, operation="capture_order")
        assert self.capture is not None, "configura fake_paypal.capture"
        return self.capture

    async def verify_webhook_signature(self, headers, raw_body, webhook_id) -> bool:
        self.verifications.append({"headers": dict(headers), "webhook_id": webhook_id})
        return self.signature_valid

    async def aclose(self) -> None:
        self.closed = True


@dataclass
class FakeNotifier:
    processing: list[tuple[int, str]] = field(default_factory=list)
    confirmations: list[tuple[int, str, Optional[int]]] = field(default_factory=list)
    processing_message_id: Optional[int] = 555
    fail: bool = False

    async def send_purchase_processing(self, target, course_title):
        if self.fail:
            raise RuntimeError("telegram caído")
        self.processing.append((target.telegram_id, course_title))
        return self.processing_message_id

    async def send_purchase_confirmation(self, target, course_title, message_id=None):
        if self.fail:
            raise RuntimeError("telegram caído")
        self.confirmations.append((target.telegram_id, course_title, message_id))
        return message_id or 1

    async def aclose(self) -> None:
        return None


@pytest.fixture
def fake_paypal() -> FakePayPal:
    client = FakePayPal()
    set_paypal_client(client)
    return client


@pytest.fixture
def fake_notifier() -> FakeNotifier:
    notifier = FakeNotifier()
    set_telegram_notifier(notifier)
    return notifier


@pytest.fixture
def webhook_ctx(session_factory, catalog, fake_paypal, fake_notifier) -> WebhookContext:
    return WebhookContext(
        session_factory=session_factory,
        catalog=catalog,
        paypal=fake_paypal,
        notifier=fake_notifier,
    )


# -----------------------------------------------------------------------------
# 5) Eventos PayPal
# -----------------------------------------------------------------------------
def paypal_event(
    event_type: str,
    *,
    resource_id: str = "CAP123",
    custom_id: Optional[str] = "user_42_course_7",
    order_id: Optional[str] = None,
    amount: Optional[str] = "19.99",
    currency: Optional[str] = "USD",
    event_id: str = "WH-1",
) -> bytes:
    resource: dict[str, Any] = {"id": resource_id, "status": "COMPLETED"}
    if custom_id is not None:
        resource["custom_id"] = custom_id
    if amount is not None or currency is not None:
        resource["amount"] = {"value": amount, "currency_code": currency}
    if order_id is not None:
        resource["supplementary_data"] = {"related_ids": {"order_id": order_id}}
    return json.dumps({"id": event_id, "event_type": event_type, "resource": resource}).encode("utf-8")


@pytest.fixture
def make_event():
    return paypal_event


# -----------------------------------------------------------------------------
# 6) initData firmado
# -----------------------------------------------------------------------------
def build_init_data(telegram_id: int, *, auth_date: Optional[int] = None, bot_token: str = TEST_BOT_TOKEN, **user) -> str:
    fields = {
        "auth_date": str(auth_date if auth_date is not None else int(time.time())),
        "query_id": f"q{telegram_id}-{time.time_ns()}",
        "user": json.dumps({"id": telegram_id, "first_name": user.pop("first_name", "Test"), **user}),
    }
    fields["hash"] = sign_init_data(fields, bot_token)
    return urlencode(fields)


@pytest.fixture
def init_data_for():
    return build_init_data


# -----------------------------------------------------------------------------
# 7) App FastAPI y cliente httpx (con ciclo de vida)
# -----------------------------------------------------------------------------
@pytest.fixture
def app(engine, catalog, fake_paypal, fake_notifier):
    """
    App principal con BD en memoria, catálogo temporal y dobles de
    PayPal/Telegram ya inyectados en sus singletons.
    """
    from app.main import app as fastapi_app

    return fastapi_app


@pytest.fixture
async def async_client(app) -> AsyncIterator[AsyncClient]:
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client

