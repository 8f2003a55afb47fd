"""Конфигурация pytest для тестов statement_builder."""

import logging
import sys
from pathlib import Path

import pytest

# Добавляем src/ в sys.path, чтобы тесты работали без установки пакета
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / 'src'))


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch):
    """Автоматически очищает переменные окружения перед каждым тестом."""
    import os

    critical_vars = ['PATH', 'HOME', 'USER', 'PYTHONPATH']
    for key in list(os.environ.keys()):
        if key not in critical_vars:
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture
def package_logger():
    """Логгер пакета; обработчики закрываются после теста."""
    logger = logging.getLogger('statement_builder')
    yield logger
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.filters.clear()
    logger.setLevel(logging.NOTSET)
