"""
Logging setup for the statement builder.

Console and rotating-file handlers, plus a filter that masks
credentials leaking into verbatim SQL fragments.
"""

from __future__ import annotations

import logging
import logging.handlers
import re
import sys
from collections.abc import Callable
from functools import wraps
from pathlib import Path
from typing import ParamSpec, TypeAlias, TypeVar

LogLevel: TypeAlias = str | int

P = ParamSpec('P')
R = TypeVar('R')

ROOT_LOGGER_NAME: str = 'statement_builder'
DEFAULT_LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_DATE_FORMAT: str = '%Y-%m-%d %H:%M:%S'
MAX_LOG_FILE_SIZE: int = 10 * 1024 * 1024  # 10 MB
BACKUP_COUNT: int = 3

# WHERE fragments are logged as given, literals included
SENSITIVE_PATTERNS: tuple[tuple[str, str], ...] = (
    (r"password[\"']?\s*[:=]\s*[\"']?([^\"'\s]+)", r'password=***'),
    (r"token[\"']?\s*[:=]\s*[\"']?([^\"'\s]+)", r'token=***'),
    (r"secret[\"']?\s*[:=]\s*[\"']?([^\"'\s]+)", r'secret=***'),
    (r"apikey[\"']?\s*[:=]\s*[\"']?([^\"'\s]+)", r'apikey=***'),
)

_LEVEL_COLORS: dict[str, str] = {
    'DEBUG': '\033[36m',
    'INFO': '\033[32m',
    'WARNING': '\033[33m',
    'ERROR': '\033[31m',
    'CRITICAL': '\033[35m',
}
_RESET_COLOR: str = '\033[0m'


def setup_logging(
    log_level: LogLevel = 'INFO',
    log_file: str | Path | None = None,
    logger_name: str = ROOT_LOGGER_NAME,
    *,
    console_output: bool = True,
    mask_sensitive: bool = True,
) -> logging.Logger:
    """
    Configure the statement builder logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Path to a log file (optional).
        logger_name: Logger name.
        console_output: Whether to write records to stdout.
        mask_sensitive: Whether to mask credentials in messages.

    Returns:
        Configured Logger object.

    Example:
        >>> logger = setup_logging('DEBUG')
        >>> logger.debug('Adapters loaded')
    """
    logger = logging.getLogger(logger_name)
    logger.handlers.clear()
    logger.filters.clear()

    numeric_level = _parse_log_level(log_level)
    logger.setLevel(numeric_level)

    formatter = logging.Formatter(fmt=DEFAULT_LOG_FORMAT, datefmt=DEFAULT_DATE_FORMAT)
    # Handler-level, so records propagated from child loggers are masked too
    handler_filter = SensitiveDataFilter() if mask_sensitive else None

    match (console_output, log_file):
        case (True, None):
            _add_console_handler(logger, formatter, handler_filter)
        case (False, str() | Path() as file):
            _add_file_handler(logger, formatter, file, handler_filter)
        case (True, str() | Path() as file):
            _add_console_handler(logger, formatter, handler_filter)
            _add_file_handler(logger, formatter, file, handler_filter)
        case (False, None):
            # Nowhere to write: fall back to console
            _add_console_handler(logger, formatter, handler_filter)
            logger.warning('No log destination configured, using console')

    logger.debug(
        'Logger %r configured with level %s',
        logger_name,
        logging.getLevelName(numeric_level),
    )
    return logger


def _parse_log_level(level: LogLevel) -> int:
    """
    Convert a logging level to its numeric value.

    Raises:
        ValueError: If level is not a known logging level.
    """
    match level:
        case int() as numeric_level if numeric_level in {0, 10, 20, 30, 40, 50}:
            return numeric_level
        case str() as string_level:
            numeric = logging.getLevelNamesMapping().get(string_level.strip().upper())
            if numeric is None:
                raise ValueError(f'Invalid logging level: {level}')
            return numeric
        case _:
            raise ValueError(f'Unsupported logging level: {level!r}')


def _add_console_handler(
    logger: logging.Logger,
    formatter: logging.Formatter,
    handler_filter: logging.Filter | None = None,
) -> None:
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(ColoredFormatter() if _supports_color() else formatter)
    if handler_filter is not None:
        console_handler.addFilter(handler_filter)
    logger.addHandler(console_handler)


def _add_file_handler(
    logger: logging.Logger,
    formatter: logging.Formatter,
    log_file: str | Path,
    handler_filter: logging.Filter | None = None,
) -> None:
    file_path = Path(log_file)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.handlers.RotatingFileHandler(
        filename=file_path,
        maxBytes=MAX_LOG_FILE_SIZE,
        backupCount=BACKUP_COUNT,
        encoding='utf-8',
    )
    file_handler.setFormatter(formatter)
    if handler_filter is not None:
        file_handler.addFilter(handler_filter)
    logger.addHandler(file_handler)


def _supports_color() -> bool:
    return (
        hasattr(sys.stdout, 'isatty')
        and sys.stdout.isatty()
        and sys.platform != 'win32'
    )


class ColoredFormatter(logging.Formatter):
    """Formatter that wraps the level name in ANSI colour codes."""

    def __init__(self) -> None:
        super().__init__(fmt=DEFAULT_LOG_FORMAT, datefmt=DEFAULT_DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        color = _LEVEL_COLORS.get(record.levelname)
        if color is None:
            return super().format(record)
        original = record.levelname
        try:
            record.levelname = f'{color}{original}{_RESET_COLOR}'
            return super().format(record)
        finally:
            record.levelname = original


class SensitiveDataFilter(logging.Filter):
    """Mask credential-looking values in the rendered message."""

    def __init__(self) -> None:
        super().__init__()
        self._patterns = [
            (re.compile(pattern, re.IGNORECASE), replacement)
            for pattern, replacement in SENSITIVE_PATTERNS
        ]

    def filter(self, record: logging.LogRecord) -> bool:
        original_msg = record.getMessage()
        filtered_msg = original_msg
        for pattern, replacement in self._patterns:
            filtered_msg = pattern.sub(replacement, filtered_msg)

        if filtered_msg != original_msg:
            record.msg = filtered_msg
            record.args = ()
        return True


def log_function_call(
    *,
    log_args: bool = True,
    log_result: bool = False,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Decorator tracing calls at DEBUG level.

    Args:
        log_args: Whether to log call arguments.
        log_result: Whether to log the returned value.

    Returns:
        Decorator for a function or method.

    Example:
        >>> @log_function_call(log_args=True, log_result=True)
        ... def quote(name: str) -> str:
        ...     return f'"{name}"'
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            logger = logging.getLogger(f'{ROOT_LOGGER_NAME}.trace')
            func_name = f'{func.__module__}.{func.__qualname__}'

            if not logger.isEnabledFor(logging.DEBUG):
                return func(*args, **kwargs)

            if log_args:
                args_repr = ', '.join(repr(arg) for arg in args)
                kwargs_repr = ', '.join(f'{k}={v!r}' for k, v in kwargs.items())
                all_args = ', '.join(filter(None, [args_repr, kwargs_repr]))
                logger.debug('Call: %s(%s)', func_name, all_args)
            else:
                logger.debug('Call: %s', func_name)

            result = func(*args, **kwargs)

            if log_result:
                logger.debug('Result %s: %r', func_name, result)
            return result

        return wrapper

    return decorator


def get_logger(
    name: str | None = None,
) -> logging.Logger:
    """
    Get a logger under the statement_builder namespace.

    Args:
        name: Logger name. If None, returns the package root logger.

    Example:
        >>> logger = get_logger('queries.oracle')
        >>> logger.name
        'statement_builder.queries.oracle'
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER_NAME)

    if not name.startswith(f'{ROOT_LOGGER_NAME}.'):
        name = f'{ROOT_LOGGER_NAME}.{name}'
    return logging.getLogger(name)
