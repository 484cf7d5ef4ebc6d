# -*- coding: utf-8 -*-
"""
tests/modules/payments/facades/webhooks/test_capture_completed.py

Otorgamiento de acceso por PAYMENT.CAPTURE.COMPLETED.

Cubre:
- Alta única de acceso + fila success + un aviso por pago
- Reentregas del mismo evento (duplicado sin efectos ni aviso)
- Promoción de la fila pending de la orden
- Usuario / curso inexistente y custom_id inválido
- Fallo de Telegram o Redis sin afectar al otorgamiento

Autor: CourseHub
Fecha: 19/10/2026
"""
import asyncio
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from app.modules.auth.models.user_models import User
from app.modules.courses.models.user_course_models import UserCourse
from app.modules.payments.enums import TransactionStatus, TransactionType
from app.modules.payments.facades.webhooks import capture_completed as capture_mod
from app.modules.payments.facades.webhooks.capture_completed import handle_capture_completed
from app.modules.payments.facades.webhooks.context import WebhookContext, WebhookOutcome
from app.modules.payments.facades.webhooks.normalize import parse_webhook_event
from app.modules.payments.models.transaction_models import Transaction
from app.modules.payments.repositories import TransactionRepository
from app.shared.database import build_engine, build_sessionmaker, init_models


async def _entitlement_count(session_factory, user_id=42, course_id=7) -> int:
    async with session_factory() as session:
        stmt = select(func.count()).select_from(UserCourse).where(
            UserCourse.user_id == user_id, UserCourse.course_id == course_id
        )
        return (await session.execute(stmt)).scalar_one()


async def _transactions(session_factory, user_id=42) -> list[Transaction]:
    async with session_factory() as session:
        stmt = select(Transaction).where(Transaction.user_id == user_id).order_by(Transaction.id)
        return list((await session.execute(stmt)).scalars().all())


async def _create_pending(session_factory, order_id="ORDER1", message_id=None) -> None:
    async with session_factory() as session:
        await TransactionRepository().create_pending(
            session,
            user_id=42,
            course_id=7,
            order_id=order_id,
            amount=Decimal("19.99"),
            currency="USD",
            notification_message_id=message_id,
        )
        await session.commit()


@pytest.mark.asyncio
async def test_grants_access_records_success_and_notifies(webhook_ctx, make_user, make_event, session_factory, fake_notifier):
    await make_user(42, telegram_id=4200)
    event = parse_webhook_event(make_event("PAYMENT.CAPTURE.COMPLETED"))

    result = await handle_capture_completed(webhook_ctx, event)

    assert result.outcome == WebhookOutcome.GRANTED
    assert (result.user_id, result.course_id) == (42, 7)
    assert await _entitlement_count(session_factory) == 1

    rows = await _transactions(session_factory)
    assert len(rows) == 1
    assert rows[0].status == TransactionStatus.SUCCESS
    assert rows[0].type == TransactionType.PURCHASE
    assert rows[0].payment_id == "CAP123"
    assert rows[0].amount == Decimal("19.99")
    assert rows[0].currency == "USD"

    assert fake_notifier.confirmations == [(4200, "Python desde cero", None)]


@pytest.mark.asyncio
async def test_redelivery_is_a_duplicate_without_side_effects(webhook_ctx, make_user, make_event, session_factory, fake_notifier):
    await make_user(42, telegram_id=4200)
    event = parse_webhook_event(make_event("PAYMENT.CAPTURE.COMPLETED"))

    first = await handle_capture_completed(webhook_ctx, event)
    second = await handle_capture_completed(webhook_ctx, event)
    third = await handle_capture_completed(webhook_ctx, event)

    assert first.outcome == WebhookOutcome.GRANTED
    assert second.outcome == WebhookOutcome.DUPLICATE
    assert third.outcome == WebhookOutcome.DUPLICATE
    assert await _entitlement_count(session_factory) == 1
    assert len(await _transactions(session_factory)) == 1
    assert len(fake_notifier.confirmations) == 1


@pytest.mark.asyncio
async def test_promotes_pending_row_and_edits_processing_message(webhook_ctx, make_user, make_event, session_factory, fake_notifier):
    await make_user(42, telegram_id=4200)
    await _create_pending(session_factory, order_id="ORDER1", message_id=555)

    event = parse_webhook_event(make_event("PAYMENT.CAPTURE.COMPLETED", order_id="ORDER1"))
    result = await handle_capture_completed(webhook_ctx, event)

    assert result.outcome == WebhookOutcome.GRANTED
    rows = await _transactions(session_factory)
    assert len(rows) == 1
    assert rows[0].status == TransactionStatus.SUCCESS
    assert rows[0].payment_id == "CAP123"
    assert fake_notifier.confirmations == [(4200, "Python desde cero", 555)]


@pytest.mark.asyncio
async def test_pending_of_other_order_is_left_untouched(webhook_ctx, make_user, make_event, session_factory):
    await make_user(42, telegram_id=4200)
    await _create_pending(session_factory, order_id="ORDER-OTHER")

    event = parse_webhook_event(make_event("PAYMENT.CAPTURE.COMPLETED", order_id="ORDER1"))
    await handle_capture_completed(webhook_ctx, event)

    statuses = sorted(str(tx.status) for tx in await _transactions(session_factory))
    assert statuses == ["pending", "success"]


@pytest.mark.asyncio
async def test_duplicate_still_reconciles_pending_row(webhook_ctx, make_user, make_event, session_factory, fake_notifier):
    """Entrega reintentada tras un fallo: el acceso ya existe pero la orden seguía pending."""
    await make_user(42, telegram_id=4200)
    await _create_pending(session_factory, order_id="ORDER1")
    async with session_factory() as session:
        session.add(UserCourse(user_id=42, course_id=7))
        await session.commit()

    event = parse_webhook_event(make_event("PAYMENT.CAPTURE.COMPLETED", order_id="ORDER1"))
    result = await handle_capture_completed(webhook_ctx, event)

    assert result.outcome == WebhookOutcome.DUPLICATE
    rows = await _transactions(session_factory)
    assert [(tx.status, tx.payment_id) for tx in rows] == [(TransactionStatus.SUCCESS, "CAP123")]
    assert fake_notifier.confirmations == []


@pytest.mark.asyncio
async def test_missing_amount_falls_back_to_catalog_price(webhook_ctx, make_user, make_event, session_factory):
    await make_user(42, telegram_id=4200)
    event = parse_webhook_event(
        make_event("PAYMENT.CAPTURE.COMPLETED", custom_id="user_42_course_8", amount=None, currency=None)
    )

    result = await handle_capture_completed(webhook_ctx, event)

    assert result.outcome == WebhookOutcome.GRANTED
    (tx,) = await _transactions(session_factory)
    assert tx.amount == Decimal("10.00")
    assert tx.currency == "EUR"


@pytest.mark.asyncio
async def test_unknown_user_grants_nothing(webhook_ctx, make_event, session_factory, fake_notifier):
    event = parse_webhook_event(make_event("PAYMENT.CAPTURE.COMPLETED"))

    result = await handle_capture_completed(webhook_ctx, event)

    assert result.outcome == WebhookOutcome.USER_NOT_FOUND
    assert await _entitlement_count(session_factory) == 0
    assert await _transactions(session_factory) == []
    assert fake_notifier.confirmations == []


@pytest.mark.asyncio
@pytest.mark.parametrize("custom_id", ["user_42_course_9", "user_42_course_99"])
async def test_unknown_course_grants_nothing(webhook_ctx, make_user, make_event, session_factory, catalog_paths, custom_id):
    courses_dir, _ = catalog_paths
    (courses_dir / "99").mkdir()
    await make_user(42, telegram_id=4200)

    event = parse_webhook_event(make_event("PAYMENT.CAPTURE.COMPLETED", custom_id=custom_id))
    result = await handle_capture_completed(webhook_ctx, event)

    assert result.outcome == WebhookOutcome.COURSE_NOT_FOUND
    assert await _transactions(session_factory) == []


@pytest.mark.asyncio
@pytest.mark.parametrize("custom_id", [None, "", "user_42", "user_abc_course_7"])
async def test_invalid_custom_id_is_rejected(webhook_ctx, make_user, make_event, session_factory, custom_id):
    await make_user(42, telegram_id=4200)
    event = parse_webhook_event(make_event("PAYMENT.CAPTURE.COMPLETED", custom_id=custom_id))

    result = await handle_capture_completed(webhook_ctx, event)

    assert result.outcome == WebhookOutcome.INVALID_CUSTOM_ID
    assert await _entitlement_count(session_factory) == 0


@pytest.mark.asyncio
async def test_notification_failure_does_not_undo_grant(webhook_ctx, make_user, make_event, session_factory, fake_notifier):
    await make_user(42, telegram_id=4200)
    fake_notifier.fail = True

    result = await handle_capture_completed(webhook_ctx, parse_webhook_event(make_event("PAYMENT.CAPTURE.COMPLETED")))

    assert result.outcome == WebhookOutcome.GRANTED
    assert await _entitlement_count(session_factory) == 1
    assert len(await _transactions(session_factory)) == 1


@pytest.mark.asyncio
async def test_grant_invalidates_user_caches(monkeypatch, webhook_ctx, make_user, make_event):
    await make_user(42, telegram_id=4200)
    deleted: list[tuple[str, ...]] = []

    async def fake_cache_delete(*keys):
        deleted.append(keys)

    monkeypatch.setattr(capture_mod, "cache_delete", fake_cache_delete)

    event = parse_webhook_event(make_event("PAYMENT.CAPTURE.COMPLETED"))
    await handle_capture_completed(webhook_ctx, event)
    await handle_capture_completed(webhook_ctx, event)

    assert deleted == [("user:42:courses", "user:4200")]


@pytest.mark.asyncio
async def test_cache_failure_does_not_undo_grant(monkeypatch, webhook_ctx, make_user, make_event, session_factory, fake_notifier):
    await make_user(42, telegram_id=4200)

    async def broken_cache_delete(*keys):
        raise ConnectionError("redis caído")

    monkeypatch.setattr(capture_mod, "cache_delete", broken_cache_delete)

    result = await handle_capture_completed(webhook_ctx, parse_webhook_event(make_event("PAYMENT.CAPTURE.COMPLETED")))

    assert result.outcome == WebhookOutcome.GRANTED
    assert await _entitlement_count(session_factory) == 1
    assert len(fake_notifier.confirmations) == 1


@pytest.mark.asyncio
async def test_muted_user_still_gets_access(webhook_ctx, make_user, make_event, session_factory):
    await make_user(42, telegram_id=4200, notifications_enabled=False)

    result = await handle_capture_completed(webhook_ctx, parse_webhook_event(make_event("PAYMENT.CAPTURE.COMPLETED")))

    assert result.outcome == WebhookOutcome.GRANTED
    assert await _entitlement_count(session_factory) == 1


# ---------------------------------------------------------------------------
# Entregas concurrentes sobre SQLite en archivo (conexiones reales en paralelo)
# ---------------------------------------------------------------------------
@pytest.fixture
async def file_session_factory(tmp_path):
    eng = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'concurrent.db'}")
    await init_models(eng)
    yield build_sessionmaker(eng)
    await eng.dispose()


@pytest.mark.asyncio
async def test_concurrent_deliveries_grant_once(file_session_factory, catalog, fake_paypal, fake_notifier, make_event):
    async with file_session_factory() as session:
        session.add(User(id=42, telegram_id=4200, first_name="Ana", notifications_enabled=True, has_started=True))
        await session.commit()
    ctx = WebhookContext(
        session_factory=file_session_factory,
        catalog=catalog,
        paypal=fake_paypal,
        notifier=fake_notifier,
    )
    event = parse_webhook_event(make_event("PAYMENT.CAPTURE.COMPLETED"))

    results = await asyncio.gather(*(handle_capture_completed(ctx, event) for _ in range(3)))

    outcomes = sorted(r.outcome.value for r in results)
    assert outcomes == sorted(
        [WebhookOutcome.GRANTED.value, WebhookOutcome.DUPLICATE.value, WebhookOutcome.DUPLICATE.value]
    )
    assert await _entitlement_count(file_session_factory) == 1
    rows = await _transactions(file_session_factory)
    assert [(tx.status, tx.payment_id) for tx in rows] == [(TransactionStatus.SUCCESS, "CAP123")]
    assert len(fake_notifier.confirmations) == 1

# Fin del archivo tests/modules/payments/facades/webhooks/test_capture_completed.py
