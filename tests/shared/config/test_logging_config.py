# -*- coding: utf-8 -*-
"""
tests/shared/config/test_logging_config.py

Formatos plain y json del logging de la aplicación.

Autor: CourseHub
Fecha: 19/10/2026
"""
import logging

import pytest
from pythonjsonlogger.json import JsonFormatter

from app.shared.config.logging_config import setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_plain():
    setup_logging(level="DEBUG", fmt="plain")
    logging.getLogger("test_plain").debug("hola plain")

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(h, logging.StreamHandler) for h in root.handlers)
    assert not any(isinstance(h.formatter, JsonFormatter) for h in root.handlers)


def test_setup_logging_json():
    setup_logging(level="INFO", fmt="json")
    logging.getLogger("test_json").info("hola json")

    assert any(isinstance(h.formatter, JsonFormatter) for h in logging.getLogger().handlers)


def test_noisy_loggers_are_quieted():
    setup_logging(level="DEBUG", fmt="plain")

    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

# Fin del archivo tests/shared/config/test_logging_config.py
