# -*- coding: utf-8 -*-
"""
app/modules/payments/routes/transactions.py

Historial de transacciones del usuario autenticado.

Endpoint:
- GET /user/transactions?page=N   (20 por página, más recientes primero)

Autor: CourseHub
Fecha: 19/10/2026
"""

from __future__ import annotations

from typing import Dict, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.auth.dependencies import get_current_user
from app.modules.auth.schemas.user_schemas import CurrentUser
from app.modules.courses.services.course_catalog import CourseCatalog, get_course_catalog
from app.modules.payments.enums import TransactionStatus, TransactionType
from app.modules.payments.models.transaction_models import Transaction
from app.modules.payments.repositories import TransactionRepository
from app.modules.payments.schemas import PageInfo, TransactionListResponse, TransactionOut
from app.shared.database import get_db
from app.shared.utils.currency import format_amount, normalize_currency

PAGE_SIZE = 20

router = APIRouter(
    prefix="/user",
    tags=["payments:transactions"],
)


def to_transaction_out(tx: Transaction, title: str, default_currency: str) -> TransactionOut:
    currency = normalize_currency(tx.currency, default_currency)
    failed = tx.status == TransactionStatus.FAILED
    if failed:
        amount = format_amount(0)
    elif tx.type == TransactionType.REFUND:
        amount = f"-{format_amount(tx.amount)}"
    else:
        amount = format_amount(tx.amount)
    return TransactionOut(
        id=tx.id,
        title="Payment Failed" if failed else title,
        date=tx.created_at.isoformat() if tx.created_at else "",
        amount=amount,
        currency=currency,
        status=str(tx.status),
        type="error" if failed else str(tx.type),
    )


@router.get("/transactions", response_model=TransactionListResponse)
async def list_transactions(
    page: int = Query(default=1, ge=1),
    user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
    catalog: CourseCatalog = Depends(get_course_catalog),
) -> TransactionListResponse:
    rows = await TransactionRepository().list_by_user(
        session, user.id, limit=PAGE_SIZE, offset=(page - 1) * PAGE_SIZE
    )
    default_currency = catalog.default_paypal_currency()

    titles: Dict[int, Optional[str]] = {}
    data = []
    for tx in rows:
        title = "Purchase"
        if tx.course_id is not None:
            if tx.course_id not in titles:
                meta = catalog.load_metadata(tx.course_id)
                titles[tx.course_id] = meta.title if meta else None
            title = titles[tx.course_id] or title
        data.append(to_transaction_out(tx, title, default_currency))

    return TransactionListResponse(
        data=data,
        pagination=PageInfo(page=page, limit=PAGE_SIZE, has_more=len(rows) == PAGE_SIZE),
    )


__all__ = ["router", "to_transaction_out"]

# Fin del archivo app/modules/payments/routes/transactions.py
