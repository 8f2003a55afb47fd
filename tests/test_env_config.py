"""Тесты для модуля env_config.py."""

import logging
from pathlib import Path

import pytest

from statement_builder.env_config import (
    Settings,
    configure_logging,
    load_config,
    print_config_summary,
)
from statement_builder.queries import (
    GenericDatabaseAdapter,
    OracleDatabaseAdapter,
    PostgreSQLDatabaseAdapter,
    create_adapter,
)

# ============================================================================
# Фикстуры для создания тестовых .env файлов
# ============================================================================


@pytest.fixture
def oracle_env_file(tmp_path: Path) -> Path:
    """Создаёт тестовый .env файл для Oracle."""
    env_content = (
        'DATABASE_ADAPTER=oracle\n'
        'ORACLE_INSERT_IGNORE_STYLE=HINT\n'
        'LOG_LEVEL=debug\n'
        'LOG_FILE=./logs/statements.log\n'
    )
    env_file = tmp_path / '.env'
    env_file.write_text(env_content)
    return env_file


@pytest.fixture
def empty_values_env_file(tmp_path: Path) -> Path:
    """Создаёт .env файл с пустыми значениями."""
    env_file = tmp_path / '.env'
    env_file.write_text('DATABASE_ADAPTER=\nORACLE_INSERT_IGNORE_STYLE=\nLOG_LEVEL=\nLOG_FILE=\n')
    return env_file


# ============================================================================
# Загрузка конфигурации
# ============================================================================


class TestLoadConfig:
    """Тесты загрузки конфигурации из .env."""

    def test_load_oracle_config(self, oracle_env_file: Path) -> None:
        config = load_config(oracle_env_file)

        assert config.database_adapter == 'Oracle'
        assert config.oracle_insert_ignore_style == 'hint'
        assert config.log_level == 'DEBUG'
        assert config.log_file == './logs/statements.log'

    def test_empty_values_fall_back_to_defaults(self, empty_values_env_file: Path) -> None:
        config = load_config(empty_values_env_file)

        assert config.database_adapter == 'Oracle'
        assert config.oracle_insert_ignore_style == 'merge'
        assert config.log_level == 'INFO'
        assert config.log_file is None

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match='Файл конфигурации не найден'):
            load_config(tmp_path / 'missing.env')

    @pytest.mark.parametrize(
        'content,field',
        [
            ('DATABASE_ADAPTER=Sybase\n', 'database_adapter'),
            ('ORACLE_INSERT_IGNORE_STYLE=replace\n', 'oracle_insert_ignore_style'),
            ('LOG_LEVEL=LOUD\n', 'log_level'),
        ],
    )
    def test_invalid_values(self, tmp_path: Path, content: str, field: str) -> None:
        env_file = tmp_path / '.env'
        env_file.write_text(content)

        with pytest.raises(ValueError, match=field) as exc_info:
            load_config(env_file)
        assert 'Ошибка валидации конфигурации' in str(exc_info.value)

    def test_unknown_adapter_lists_available(self, tmp_path: Path) -> None:
        env_file = tmp_path / '.env'
        env_file.write_text('DATABASE_ADAPTER=Sybase\n')

        with pytest.raises(ValueError, match='Available adapters: .*Oracle'):
            load_config(env_file)


# ============================================================================
# Создание адаптера из настроек
# ============================================================================


class TestCreateAdapter:
    """Тесты создания адаптера по настройкам."""

    def test_defaults_to_oracle_merge(self) -> None:
        adapter = create_adapter(Settings())
        assert isinstance(adapter, OracleDatabaseAdapter)
        assert adapter.insert_ignore_style == 'merge'

    def test_oracle_style_from_settings(self, oracle_env_file: Path) -> None:
        adapter = create_adapter(load_config(oracle_env_file))
        assert isinstance(adapter, OracleDatabaseAdapter)
        assert adapter.insert_ignore_style == 'hint'

    @pytest.mark.parametrize(
        'name,adapter_cls',
        [('generic', GenericDatabaseAdapter), ('postgresql', PostgreSQLDatabaseAdapter)],
    )
    def test_other_adapters(self, name: str, adapter_cls: type) -> None:
        adapter = create_adapter(Settings(database_adapter=name))
        assert type(adapter) is adapter_cls

    def test_settings_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('DATABASE_ADAPTER', 'mysql')
        assert Settings().database_adapter == 'MySQL'


# ============================================================================
# Сводка конфигурации
# ============================================================================


def test_print_config_summary_to_console(capsys: pytest.CaptureFixture[str]) -> None:
    print_config_summary(Settings(log_file='app.log'))

    output = capsys.readouterr().out
    assert 'КОНФИГУРАЦИЯ STATEMENT BUILDER' in output
    assert 'Database Adapter' in output
    assert 'Oracle' in output
    assert 'app.log' in output


def test_print_config_summary_to_logger(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger('statement_builder.test_config')
    caplog.set_level(logging.INFO, logger='statement_builder.test_config')

    print_config_summary(Settings(), logger=logger)

    assert 'Oracle Insert Ignore Style' in caplog.text
    assert 'Log File' not in caplog.text


def test_configure_logging_from_settings(tmp_path: Path, package_logger: logging.Logger) -> None:
    log_file = tmp_path / 'statements.log'

    logger = configure_logging(Settings(log_level='warning', log_file=str(log_file)))

    assert logger is package_logger
    assert logger.level == logging.WARNING
    assert any(isinstance(h, logging.FileHandler) for h in logger.handlers)
    assert log_file.exists()
