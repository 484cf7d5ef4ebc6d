# -*- coding: utf-8 -*-
"""
tests/modules/courses/test_user_courses_routes.py

Rutas objetivo:
  - GET /api/user/courses
  - PUT /api/user/courses/{course_id}/favorite

Autor: CourseHub
Fecha: 19/10/2026
"""
from http import HTTPStatus

import pytest

from app.modules.courses.models.user_course_models import UserCourse
from app.modules.courses.routes import user_courses as routes_mod

URL = "/api/user/courses"


@pytest.fixture
async def auth_headers(make_user, init_data_for):
    await make_user(42, telegram_id=4200)
    return lambda: {"X-Telegram-Init-Data": init_data_for(4200)}


async def _own(session_factory, *course_ids):
    async with session_factory() as session:
        for course_id in course_ids:
            session.add(UserCourse(user_id=42, course_id=course_id))
        await session.commit()


@pytest.mark.asyncio
async def test_lists_owned_courses_with_catalog_data(async_client, auth_headers, session_factory):
    await _own(session_factory, 7, 404)

    r = await async_client.get(URL, headers=auth_headers())

    assert r.status_code == HTTPStatus.OK
    body = r.json()
    assert body["success"] is True
    (course,) = body["data"]
    assert course["id"] == 7
    assert course["title"] == "Python desde cero"
    assert course["author"] == "Ana Pérez"
    assert course["price"] == "19.99"
    assert course["currency"] == "USD"
    assert course["category"] == "Programación"
    assert course["isFavorite"] is False
    assert course["purchasedAt"]


@pytest.mark.asyncio
async def test_empty_list(async_client, auth_headers):
    r = await async_client.get(URL, headers=auth_headers())
    assert r.json() == {"success": True, "data": []}


@pytest.mark.asyncio
async def test_cached_list_is_served_without_db(monkeypatch, async_client, auth_headers):
    cached = [
        {"id": 8, "title": "Álgebra lineal", "author": "Luis", "price": "10.00", "currency": "EUR", "isFavorite": True}
    ]

    async def fake_cache_get(key):
        return cached if key == "user:42:courses" else None

    monkeypatch.setattr(routes_mod, "cache_get_json", fake_cache_get)

    r = await async_client.get(URL, headers=auth_headers())

    assert r.json()["data"][0]["title"] == "Álgebra lineal"
    assert r.json()["data"][0]["isFavorite"] is True


@pytest.mark.asyncio
async def test_list_is_cached_by_alias(monkeypatch, async_client, auth_headers, session_factory):
    await _own(session_factory, 7)
    stored = {}

    async def fake_cache_set(key, value, ttl_seconds):
        stored[key] = (value, ttl_seconds)

    monkeypatch.setattr(routes_mod, "cache_set_json", fake_cache_set)

    await async_client.get(URL, headers=auth_headers())

    value, ttl = stored["user:42:courses"]
    assert ttl == routes_mod.USER_COURSES_CACHE_TTL
    assert value[0]["isFavorite"] is False


@pytest.mark.asyncio
async def test_toggle_favorite(monkeypatch, async_client, auth_headers, session_factory):
    await _own(session_factory, 7)
    deleted = []

    async def fake_cache_delete(*keys):
        deleted.append(keys)

    monkeypatch.setattr(routes_mod, "cache_delete", fake_cache_delete)

    first = await async_client.put(f"{URL}/7/favorite", headers=auth_headers())
    second = await async_client.put(f"{URL}/7/favorite", headers=auth_headers())

    assert first.json() == {"success": True, "data": {"isFavorite": True}}
    assert second.json() == {"success": True, "data": {"isFavorite": False}}
    assert deleted == [("user:42:courses",), ("user:42:courses",)]


@pytest.mark.asyncio
async def test_toggle_favorite_on_unowned_course(async_client, auth_headers):
    r = await async_client.put(f"{URL}/8/favorite", headers=auth_headers())

    assert r.status_code == HTTPStatus.OK
    assert r.json()["data"]["isFavorite"] is False


@pytest.mark.asyncio
async def test_toggle_favorite_invalid_id(async_client, auth_headers):
    r = await async_client.put(f"{URL}/abc/favorite", headers=auth_headers())

    assert r.status_code == HTTPStatus.BAD_REQUEST
    assert r.json()["detail"] == "Invalid course ID"

# Fin del archivo tests/modules/courses/test_user_courses_routes.py
