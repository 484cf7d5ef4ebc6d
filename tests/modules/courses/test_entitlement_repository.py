# -*- coding: utf-8 -*-
"""
tests/modules/courses/test_entitlement_repository.py

Propiedad de cursos: alta idempotente, revocación y favoritos.

Autor: CourseHub
Fecha: 19/10/2026
"""
import pytest

from app.modules.courses.repositories.entitlement_repository import EntitlementRepository

repo = EntitlementRepository()


@pytest.fixture(autouse=True)
async def _user(make_user):
    await make_user(42, telegram_id=4200)


@pytest.mark.asyncio
async def test_grant_if_absent_only_creates_once(db):
    assert await repo.grant_if_absent(db, 42, 7) is True
    assert await repo.grant_if_absent(db, 42, 7) is False
    await db.commit()

    assert await repo.exists(db, 42, 7)
    assert len(await repo.list_by_user(db, 42)) == 1


@pytest.mark.asyncio
async def test_grant_for_missing_user_fails_on_foreign_key(db):
    # El grantor comprueba el usuario antes; la FK es la última barrera
    assert await repo.grant_if_absent(db, 999, 7) is False


@pytest.mark.asyncio
async def test_revoke_is_idempotent(db):
    await repo.grant_if_absent(db, 42, 7)
    assert await repo.revoke(db, 42, 7) == 1
    assert await repo.revoke(db, 42, 7) == 0
    assert not await repo.exists(db, 42, 7)


@pytest.mark.asyncio
async def test_toggle_favorite(db):
    await repo.grant_if_absent(db, 42, 7)

    assert await repo.toggle_favorite(db, 42, 7) is True
    assert await repo.toggle_favorite(db, 42, 7) is False
    assert await repo.toggle_favorite(db, 42, 8) is None

# Fin del archivo tests/modules/courses/test_entitlement_repository.py
