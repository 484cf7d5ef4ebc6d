# -*- coding: utf-8 -*-
"""
tests/modules/payments/facades/checkout/test_create_purchase_order.py

Fachada de compra: validaciones, orden PayPal y fila pending.

Autor: CourseHub
Fecha: 19/10/2026
"""
from decimal import Decimal

import pytest
from sqlalchemy import select

from app.modules.auth.schemas.user_schemas import CurrentUser
from app.modules.courses.models.user_course_models import UserCourse
from app.modules.payments.enums import TransactionStatus, TransactionType
from app.modules.payments.facades.checkout import (
    AlreadyPurchasedError,
    CourseNotFoundError,
    InvalidCourseIdError,
    create_purchase_order,
)
from app.modules.payments.models.transaction_models import Transaction
from app.modules.payments.services.paypal_client import PayPalAPIError

FRONTEND = "https://miniapp.example.com"


@pytest.fixture
async def buyer(make_user) -> CurrentUser:
    user = await make_user(42, telegram_id=4200)
    return CurrentUser.model_validate(user)


async def _create(session_factory, buyer, catalog, fake_paypal, fake_notifier, course_id=7):
    async with session_factory() as session:
        return await create_purchase_order(
            session,
            user=buyer,
            course_id=course_id,
            catalog=catalog,
            paypal=fake_paypal,
            notifier=fake_notifier,
            frontend_url=FRONTEND,
        )


async def _transactions(session_factory):
    async with session_factory() as session:
        return list((await session.execute(select(Transaction))).scalars().all())


@pytest.mark.asyncio
async def test_creates_order_and_pending_transaction(session_factory, buyer, catalog, fake_paypal, fake_notifier):
    data = await _create(session_factory, buyer, catalog, fake_paypal, fake_notifier)

    assert data.order_id == "ORDER1"
    assert data.approve_url.endswith("token=ORDER1")
    assert data.price == pytest.approx(19.99)
    assert data.amount == "19.99"
    assert data.currency == "USD"

    (order,) = fake_paypal.orders
    assert order["custom_id"] == "user_42_course_7"
    assert order["description"] == "Python desde cero"
    assert order["amount"] == Decimal("19.99")
    assert order["return_url"] == f"{FRONTEND}/purchase/success"
    assert order["cancel_url"] == f"{FRONTEND}/purchase/cancelled"

    (tx,) = await _transactions(session_factory)
    assert tx.status == TransactionStatus.PENDING
    assert tx.type == TransactionType.PURCHASE
    assert tx.payment_id == "ORDER1"
    assert tx.notification_message_id == 555

    assert fake_notifier.processing == [(4200, "Python desde cero")]


@pytest.mark.asyncio
async def test_course_currency_comes_from_payments_config(session_factory, buyer, catalog, fake_paypal, fake_notifier):
    data = await _create(session_factory, buyer, catalog, fake_paypal, fake_notifier, course_id=8)

    assert data.currency == "EUR"
    assert data.amount == "10.00"


@pytest.mark.asyncio
async def test_notification_failure_keeps_order(session_factory, buyer, catalog, fake_paypal, fake_notifier):
    fake_notifier.fail = True

    data = await _create(session_factory, buyer, catalog, fake_paypal, fake_notifier)

    assert data.order_id == "ORDER1"
    (tx,) = await _transactions(session_factory)
    assert tx.notification_message_id is None


@pytest.mark.asyncio
@pytest.mark.parametrize("course_id", [0, -3])
async def test_invalid_course_id(session_factory, buyer, catalog, fake_paypal, fake_notifier, course_id):
    with pytest.raises(InvalidCourseIdError):
        await _create(session_factory, buyer, catalog, fake_paypal, fake_notifier, course_id=course_id)
    assert fake_paypal.orders == []


@pytest.mark.asyncio
@pytest.mark.parametrize("course_id", [9, 404])
async def test_unknown_course(session_factory, buyer, catalog, fake_paypal, fake_notifier, course_id):
    with pytest.raises(CourseNotFoundError):
        await _create(session_factory, buyer, catalog, fake_paypal, fake_notifier, course_id=course_id)
    assert fake_paypal.orders == []


@pytest.mark.asyncio
async def test_already_purchased(session_factory, buyer, catalog, fake_paypal, fake_notifier):
    async with session_factory() as session:
        session.add(UserCourse(user_id=42, course_id=7))
        await session.commit()

    with pytest.raises(AlreadyPurchasedError):
        await _create(session_factory, buyer, catalog, fake_paypal, fake_notifier)
    assert fake_paypal.orders == []
    assert await _transactions(session_factory) == []


@pytest.mark.asyncio
async def test_paypal_failure_leaves_no_pending_row(session_factory, buyer, catalog, fake_paypal, fake_notifier):
    fake_paypal.fail_create = True

    with pytest.raises(PayPalAPIError):
        await _create(session_factory, buyer, catalog, fake_paypal, fake_notifier)

    assert await _transactions(session_factory) == []
    assert fake_notifier.processing == []

# Fin del archivo tests/modules/payments/facades/checkout/test_create_purchase_order.py
