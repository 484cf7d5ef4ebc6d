# -*- coding: utf-8 -*-
"""
app/shared/database/database.py

SQLAlchemy async. PostgreSQL (asyncpg) en producción, SQLite (aiosqlite)
en desarrollo y pruebas.

Provee:
- build_engine(url): crea un AsyncEngine con los ajustes del dialecto
- get_engine() / get_sessionmaker(): singletons perezosos desde settings
- Dependencias FastAPI: get_async_session / get_db
- init_models() / dispose_engine() / check_database_health()

Notas:
- En SQLite se activa el recipe de SAVEPOINT de SQLAlchemy (pysqlite no
  emite BEGIN por sí mismo), necesario para begin_nested().
- Las foreign keys de SQLite se habilitan por conexión.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import AsyncGenerator, Optional

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.shared.database.base import Base

logger = logging.getLogger(__name__)

SQLITE_BUSY_TIMEOUT_SECONDS = 15.0

_engine: Optional[AsyncEngine] = None
_sessionmaker: Optional[async_sessionmaker[AsyncSession]] = None


def _enable_sqlite_savepoints(engine: AsyncEngine, begin_statement: str = "BEGIN") -> None:
    """
    Recipe oficial de SQLAlchemy para SAVEPOINT con pysqlite/aiosqlite.

    Sobre archivo se usa BEGIN IMMEDIATE: el lock de escritura se toma al
    iniciar la transacción y los escritores concurrentes esperan el busy
    timeout.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):  # noqa: ARG001
        # Desactiva el BEGIN implícito del driver
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql(begin_statement)


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """
    Crea un AsyncEngine.

    - sqlite en memoria: StaticPool (una sola conexión compartida)
    - sqlite en archivo: crea el directorio padre si no existe; BEGIN IMMEDIATE
    - postgres: pool por defecto con pre-ping
    """
    sa_url = make_url(url)
    if sa_url.get_backend_name() == "sqlite":
        database = sa_url.database or ""
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        begin_statement = "BEGIN"
        if database in ("", ":memory:"):
            kwargs["poolclass"] = StaticPool
        else:
            Path(database).parent.mkdir(parents=True, exist_ok=True)
            kwargs["connect_args"]["timeout"] = SQLITE_BUSY_TIMEOUT_SECONDS
            begin_statement = "BEGIN IMMEDIATE"
        engine = create_async_engine(url, echo=echo, **kwargs)
        _enable_sqlite_savepoints(engine, begin_statement)
        return engine

    return create_async_engine(url, echo=echo, pool_pre_ping=True)


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        expire_on_commit=False,
        class_=AsyncSession,
        autoflush=False,
    )


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        from app.shared.config import get_settings

        settings = get_settings()
        _engine = build_engine(settings.db_url, echo=settings.db_echo)
        logger.info(f"[DB] Engine creado ({make_url(settings.db_url).get_backend_name()})")
    return _engine


def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    global _sessionmaker
    if _sessionmaker is None:
        _sessionmaker = build_sessionmaker(get_engine())
    return _sessionmaker


def set_engine(engine: AsyncEngine) -> None:
    """Reemplaza el engine global (tests / arranque personalizado)."""
    global _engine, _sessionmaker
    _engine = engine
    _sessionmaker = build_sessionmaker(engine)


async def init_models(engine: Optional[AsyncEngine] = None) -> None:
    """Crea las tablas declaradas en Base.metadata si no existen."""
    # Registra los modelos en el metadata
    import app.modules.auth.models  # noqa: F401
    import app.modules.courses.models  # noqa: F401
    import app.modules.payments.models  # noqa: F401

    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("[DB] Esquema verificado (create_all)")


async def dispose_engine() -> None:
    global _engine, _sessionmaker
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _sessionmaker = None


# ── Dependencias FastAPI
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependencia para FastAPI: yield AsyncSession."""
    async with get_sessionmaker()() as session:
        yield session


# Alias usado por los routers
get_db = get_async_session


async def check_database_health() -> bool:
    try:
        async with get_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except (SQLAlchemyError, OSError) as e:
        logger.warning(f"[DB] Health check falló: {e}")
        return False


__all__ = [
    "build_engine",
    "build_sessionmaker",
    "get_engine",
    "get_sessionmaker",
    "set_engine",
    "init_models",
    "dispose_engine",
    "get_async_session",
    "get_db",
    "check_database_health",
]

# Fin del archivo app/shared/database/database.py
