# -*- coding: utf-8 -*-
"""
app/modules/payments/models/transaction_models.py

Modelo ORM para la tabla transactions.

Cada fila registra un intento de pago o un reembolso. El índice único
parcial sobre payment_id (sólo status='success') impide dos filas de
éxito para la misma captura aunque lleguen webhooks duplicados en paralelo.

Autor: CourseHub
Fecha: 19/10/2026
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    BigInteger,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    func,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base
from app.modules.payments.enums import TransactionStatus, TransactionType


class Transaction(Base):
    """Intento de pago / reembolso de un curso."""

    __tablename__ = "transactions"
    __table_args__ = (
        Index("ix_transactions_user_course_status", "user_id", "course_id", "status"),
        Index(
            "uq_transactions_success_payment_id",
            "payment_id",
            unique=True,
            sqlite_where=text("status = 'success'"),
            postgresql_where=text("status = 'success'"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    course_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # order id (pending) o capture id (success/failed/refunded)
    payment_id: Mapped[Optional[str]] = mapped_column(String(128), nullable=True, index=True)

    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0.00"))
    currency: Mapped[str] = mapped_column(String(3), nullable=False)

    status: Mapped[TransactionStatus] = mapped_column(
        TransactionStatus.as_column_type(),
        nullable=False,
    )
    type: Mapped[TransactionType] = mapped_column(
        TransactionType.as_column_type(),
        nullable=False,
        default=TransactionType.PURCHASE,
    )

    # message_id del aviso "procesando" enviado por el bot, para editarlo luego
    notification_message_id: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:  # pragma: no cover
        return (
            f"<Transaction id={self.id} user_id={self.user_id} course_id={self.course_id} "
            f"payment_id={self.payment_id} status={self.status}>"
        )


__all__ = ["Transaction"]
# Fin del archivo app/modules/payments/models/transaction_models.py
