"""Модуль загрузки конфигурации из .env файла с использованием Pydantic."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from dotenv import load_dotenv
from pydantic import Field, ValidationError, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from statement_builder.error_handler import UnknownAdapterError
from statement_builder.logger import get_logger, setup_logging
from statement_builder.queries import get_adapter_class
from statement_builder.queries.oracle import INSERT_IGNORE_STYLES

VALID_LOG_LEVELS: Final[frozenset[str]] = frozenset(
    ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
)

DEFAULT_CONFIG: Mapping[str, str] = {
    'DATABASE_ADAPTER': 'Oracle',
    'ORACLE_INSERT_IGNORE_STYLE': 'merge',
    'LOG_LEVEL': 'INFO',
}


class Settings(BaseSettings):
    """Pydantic Settings для загрузки конфигурации из .env."""

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    database_adapter: str = Field(
        default=DEFAULT_CONFIG['DATABASE_ADAPTER'],
        description='Имя адаптера SQL-диалекта: Oracle, Generic, PostgreSQL, MySQL',
    )
    oracle_insert_ignore_style: str = Field(
        default=DEFAULT_CONFIG['ORACLE_INSERT_IGNORE_STYLE'],
        description='Форма INSERT_IGNORE для Oracle: merge, hint, on_conflict',
    )
    log_level: str = Field(
        default=DEFAULT_CONFIG['LOG_LEVEL'],
        description='Уровень логирования',
    )
    log_file: str | None = Field(None, description='Путь к файлу логов')

    @field_validator(
        'database_adapter',
        'oracle_insert_ignore_style',
        'log_level',
        'log_file',
        mode='before',
    )
    @classmethod
    def parse_empty_str(cls, v: object, info: ValidationInfo) -> object:
        """Преобразует пустые строки в дефолтные значения для str полей."""
        if isinstance(v, str):
            v = v.strip()
        if v == '' or v is None:
            field_name = info.field_name or ''
            return DEFAULT_CONFIG.get(field_name.upper())
        return v

    @field_validator('database_adapter')
    @classmethod
    def normalize_database_adapter(cls, v: str) -> str:
        """Проверяет, что адаптер зарегистрирован, и возвращает его каноническое имя."""
        try:
            return get_adapter_class(v).name
        except UnknownAdapterError as e:
            raise ValueError(str(e)) from None

    @field_validator('oracle_insert_ignore_style')
    @classmethod
    def validate_insert_ignore_style(cls, v: str) -> str:
        normalized = v.lower()
        if normalized not in INSERT_IGNORE_STYLES:
            valid_styles = ', '.join(sorted(INSERT_IGNORE_STYLES))
            raise ValueError(
                f"Недопустимый ORACLE_INSERT_IGNORE_STYLE='{v}'. Допустимые значения: {valid_styles}"
            )
        return normalized

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        normalized = v.upper()
        if normalized not in VALID_LOG_LEVELS:
            valid_levels = ', '.join(sorted(VALID_LOG_LEVELS))
            raise ValueError(f"Недопустимый LOG_LEVEL='{v}'. Допустимые значения: {valid_levels}")
        return normalized


def load_config(env_file: str | Path = '.env') -> Settings:
    """
    Загружает конфигурацию из .env файла.

    Raises:
        FileNotFoundError: Если файл не найден.
        ValueError: Если значения не прошли валидацию.
    """
    env_path = Path(env_file)
    if not env_path.exists():
        error_msg = f'Файл конфигурации не найден: {env_path.absolute()}'
        get_logger('config').error(error_msg)
        raise FileNotFoundError(error_msg)
    try:
        load_dotenv(env_path)
        return Settings(_env_file=env_path)  # type: ignore[call-arg]
    except ValidationError as e:
        full_error_msg = _format_validation_error(e)
        get_logger('config').error(full_error_msg)
        raise ValueError(full_error_msg) from e


def _format_validation_error(e: ValidationError) -> str:
    error_messages = []
    for error in e.errors():
        field = ' -> '.join(str(loc) for loc in error['loc'])
        error_messages.append(f' • {field}: {error["msg"]}')
    formatted_errors = '\n'.join(error_messages)
    return f'Ошибка валидации конфигурации:\n{formatted_errors}'


def print_config_summary(
    config: Settings,
    *,
    logger: logging.Logger | None = None,
) -> None:
    """Выводит сводку конфигурации в лог или в консоль."""
    data = config.model_dump()
    sections = [
        ('Адаптер', ['database_adapter', 'oracle_insert_ignore_style']),
        ('Логирование', ['log_level', 'log_file']),
    ]
    lines = ['=' * 60, 'КОНФИГУРАЦИЯ STATEMENT BUILDER', '=' * 60]
    for section_name, params in sections:
        lines.extend(('', f'[{section_name}]', '-' * 40))
        for param in params:
            value = data.get(param)
            if value is None:
                continue
            display_name = param.replace('_', ' ').title()
            lines.append(f' {display_name:28}: {value}')
    lines.append('=' * 60)

    if logger:
        for line in lines:
            logger.info(line)
    else:
        print('\n'.join(lines))


def configure_logging(config: Settings) -> logging.Logger:
    """Настраивает логгер пакета на основе конфигурации."""
    return setup_logging(log_level=config.log_level, log_file=config.log_file)
