# -*- coding: utf-8 -*-
"""
app/modules/payments/repositories/transaction_repository.py

Repositorio para la tabla transactions.

Responsabilidades:
- Alta de la transacción pending al crear la orden
- Reconciliación de capturas (pending -> success o alta de success),
  segura ante reentregas del mismo webhook
- Altas de failed / refunded
- Historial por usuario

Autor: CourseHub
Fecha: 19/10/2026
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.payments.enums import TransactionStatus, TransactionType
from app.modules.payments.models.transaction_models import Transaction

logger = logging.getLogger(__name__)


class ReconcileOutcome(StrEnum):
    PROMOTED_PENDING = "promoted_pending"
    INSERTED_SUCCESS = "inserted_success"
    ALREADY_RECORDED = "already_recorded"


@dataclass(frozen=True)
class ReconcileResult:
    outcome: ReconcileOutcome
    transaction: Optional[Transaction]

    @property
    def notification_message_id(self) -> Optional[int]:
        return self.transaction.notification_message_id if self.transaction else None


class TransactionRepository(BaseRepository[Transaction]):
    def __init__(self) -> None:
        super().__init__(Transaction)

    # -----------------------------------------------------------
    # Búsquedas
    # -----------------------------------------------------------
    async def get_success_by_payment_id(
        self,
        session: AsyncSession,
        payment_id: str,
    ) -> Optional[Transaction]:
        stmt = select(Transaction).where(
            Transaction.payment_id == payment_id,
            Transaction.status == TransactionStatus.SUCCESS,
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def get_pending_for_order(
        self,
        session: AsyncSession,
        user_id: int,
        course_id: int,
        order_id: str,
    ) -> Optional[Transaction]:
        stmt = (
            select(Transaction)
            .where(
                Transaction.user_id == user_id,
                Transaction.course_id == course_id,
                Transaction.status == TransactionStatus.PENDING,
                Transaction.payment_id == order_id,
            )
            .order_by(Transaction.id.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().first()

    async def list_by_user(
        self,
        session: AsyncSession,
        user_id: int,
        limit: int = 20,
        offset: int = 0,
    ) -> Sequence[Transaction]:
        stmt = (
            select(Transaction)
            .where(Transaction.user_id == user_id)
            .order_by(Transaction.created_at.desc(), Transaction.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    # -----------------------------------------------------------
    # Altas
    # -----------------------------------------------------------
    async def create_pending(
        self,
        session: AsyncSession,
        *,
        user_id: int,
        course_id: int,
        order_id: str,
        amount: Decimal,
        currency: str,
        notification_message_id: Optional[int] = None,
    ) -> Transaction:
        return await self.create(
            session,
            user_id=user_id,
            course_id=course_id,
            payment_id=order_id,
            amount=amount,
            currency=currency,
            status=TransactionStatus.PENDING,
            type=TransactionType.PURCHASE,
            notification_message_id=notification_message_id,
        )

    async def record_failed(
        self,
        session: AsyncSession,
        *,
        user_id: int,
        course_id: int,
        payment_id: Optional[str],
        amount: Decimal,
        currency: str,
    ) -> Transaction:
        return await self.create(
            session,
            user_id=user_id,
            course_id=course_id,
            payment_id=payment_id,
            amount=amount,
            currency=currency,
            status=TransactionStatus.FAILED,
            type=TransactionType.PURCHASE,
        )

    async def record_refunded(
        self,
        session: AsyncSession,
        *,
        user_id: int,
        course_id: int,
        payment_id: Optional[str],
        amount: Decimal,
        currency: str,
    ) -> Transaction:
        return await self.create(
            session,
            user_id=user_id,
            course_id=course_id,
            payment_id=payment_id,
            amount=amount,
            currency=currency,
            status=TransactionStatus.REFUNDED,
            type=TransactionType.REFUND,
        )

    # -----------------------------------------------------------
    # Reconciliación de capturas
    # -----------------------------------------------------------
    async def reconcile_capture(
        self,
        session: AsyncSession,
        *,
        user_id: int,
        course_id: int,
        capture_id: str,
        order_id: Optional[str],
        amount: Decimal,
        currency: str,
    ) -> ReconcileResult:
        """
        Deja exactamente una fila success para `capture_id`.

        1. Si ya existe success con payment_id == capture_id: no hace nada.
        2. Si hay pending (user, course, order_id): la promueve a success.
        3. Si no: inserta una fila success nueva.

        Los pasos 2 y 3 van en SAVEPOINT; si el índice único parcial
        detecta que otra entrega concurrente ya registró la captura, el
        resultado es ALREADY_RECORDED.
        """
        existing = await self.get_success_by_payment_id(session, capture_id)
        if existing is not None:
            return ReconcileResult(ReconcileOutcome.ALREADY_RECORDED, existing)

        pending = None
        if order_id:
            pending = await self.get_pending_for_order(session, user_id, course_id, order_id)

        if pending is not None:
            try:
                async with session.begin_nested():
                    pending.status = TransactionStatus.SUCCESS
                    pending.payment_id = capture_id
                    pending.amount = amount
                    pending.currency = currency
                    await session.flush()
            except IntegrityError:
                logger.info(f"[tx] captura {capture_id} ya registrada por otra entrega")
                await session.refresh(pending)
                return ReconcileResult(
                    ReconcileOutcome.ALREADY_RECORDED,
                    await self.get_success_by_payment_id(session, capture_id),
                )
            return ReconcileResult(ReconcileOutcome.PROMOTED_PENDING, pending)

        created = await self.insert_if_absent(
            session,
            user_id=user_id,
            course_id=course_id,
            payment_id=capture_id,
            amount=amount,
            currency=currency,
            status=TransactionStatus.SUCCESS,
            type=TransactionType.PURCHASE,
            notification_message_id=None,
        )
        if created is None:
            logger.info(f"[tx] captura {capture_id} ya registrada por otra entrega")
            return ReconcileResult(
                ReconcileOutcome.ALREADY_RECORDED,
                await self.get_success_by_payment_id(session, capture_id),
            )
        return ReconcileResult(ReconcileOutcome.INSERTED_SUCCESS, created)


__all__ = [
    "TransactionRepository",
    "ReconcileOutcome",
    "ReconcileResult",
]
# Fin del archivo app/modules/payments/repositories/transaction_repository.py
