"""
Тесты для модуля логирования.

Проверяет настройку логгера, маскирование данных и трассировку вызовов.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from statement_builder.logger import (
    get_logger,
    log_function_call,
    setup_logging,
)
from statement_builder.queries import GenericDatabaseAdapter


def test_setup_logging_console(package_logger: logging.Logger) -> None:
    """Тест настройки логирования в консоль."""
    logger = setup_logging(log_level='DEBUG', console_output=True)

    assert logger is package_logger
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)


def test_setup_logging_file(tmp_path: Path, package_logger: logging.Logger) -> None:
    """Тест настройки логирования в файл."""
    log_file = tmp_path / 'logs' / 'statements.log'

    logger = setup_logging(log_level='INFO', log_file=log_file, console_output=False)
    logger.info('Test file logging')
    for handler in logger.handlers:
        handler.flush()

    assert log_file.exists(), 'Log file was not created'
    assert 'Test file logging' in log_file.read_text(encoding='utf-8')


def test_repeated_setup_does_not_duplicate_handlers(package_logger: logging.Logger) -> None:
    setup_logging('INFO')
    logger = setup_logging('WARNING')

    assert len(logger.handlers) == 1
    assert len(logger.handlers[0].filters) == 1
    assert not logger.filters


def test_no_destination_falls_back_to_console(package_logger: logging.Logger) -> None:
    logger = setup_logging('INFO', console_output=False)
    assert len(logger.handlers) == 1


@pytest.mark.parametrize('level', ['LOUD', 15, 3.5])
def test_invalid_log_level(level, package_logger: logging.Logger) -> None:
    with pytest.raises(ValueError):
        setup_logging(level)


def test_sensitive_data_masking(
    capsys: pytest.CaptureFixture[str], package_logger: logging.Logger
) -> None:
    """Пароли не попадают в вывод обработчика."""
    logger = setup_logging(log_level='DEBUG', mask_sensitive=True)

    logger.info("Filter: login = 'admin' AND password='secret123' AND token=abc456")

    output = capsys.readouterr().out
    assert 'secret123' not in output
    assert 'abc456' not in output
    assert 'password=***' in output


def test_adapter_trace_is_masked(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], package_logger: logging.Logger
) -> None:
    """WHERE-фрагменты из трассировки адаптера маскируются в консоли и в файле."""
    log_file = tmp_path / 'statements.log'
    logger = setup_logging(log_level='DEBUG', log_file=log_file, mask_sensitive=True)

    statement = GenericDatabaseAdapter().get_select_statement('t', None, "password='secret123'")
    for handler in logger.handlers:
        handler.flush()

    assert statement == "SELECT * FROM t WHERE password='secret123'"
    output = capsys.readouterr().out
    assert 'statement_builder.trace' in output
    assert 'password=***' in output
    assert 'secret123' not in output
    assert 'secret123' not in log_file.read_text(encoding='utf-8')


def test_masking_can_be_disabled(
    capsys: pytest.CaptureFixture[str], package_logger: logging.Logger
) -> None:
    logger = setup_logging(log_level='DEBUG', mask_sensitive=False)
    logger.info('password=visible')
    assert 'password=visible' in capsys.readouterr().out


def test_log_function_call_decorator(caplog: pytest.LogCaptureFixture) -> None:
    """Тест декоратора логирования вызова функции."""
    caplog.set_level(logging.DEBUG, logger='statement_builder.trace')

    @log_function_call(log_args=True, log_result=True)
    def quote(name: str, *, char: str = '"') -> str:
        return f'{char}{name}{char}'

    assert quote('col', char='`') == '`col`'
    assert "quote('col', char='`')" in caplog.text
    assert "'`col`'" in caplog.text


def test_log_function_call_without_args(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger='statement_builder.trace')

    @log_function_call(log_args=False)
    def secret_filter(value: str) -> str:
        return value

    secret_filter('hidden')
    assert 'secret_filter' in caplog.text
    assert 'hidden' not in caplog.text


@pytest.mark.parametrize(
    'name,expected',
    [
        (None, 'statement_builder'),
        ('queries.oracle', 'statement_builder.queries.oracle'),
        ('statement_builder.config', 'statement_builder.config'),
    ],
)
def test_get_logger(name: str | None, expected: str) -> None:
    assert get_logger(name).name == expected
