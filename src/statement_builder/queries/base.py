"""
Base adapter and registry for dialect-specific SQL generation.

Every adapter exposes the same capability set: identify itself, build a
paginated SELECT, and optionally build UPSERT and INSERT-IGNORE statements.
The base class carries the generic behaviour; dialects override the
``_build_*`` hooks only, so the public methods stay the single entry point
for validation and clause composition.

WHERE and ORDER BY fragments are inserted verbatim. Escaping them is the
caller's job.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping, Sequence
from typing import TYPE_CHECKING, ClassVar, TypeAlias, TypeVar

from statement_builder.error_handler import (
    AdapterRegistrationError,
    UnknownAdapterError,
    UnsupportedOperationError,
    require_argument,
)
from statement_builder.logger import get_logger, log_function_call

if TYPE_CHECKING:
    from statement_builder.env_config import Settings

ColumnNames: TypeAlias = Sequence[str]
KeyColumnNames: TypeAlias = Collection[str]
A = TypeVar('A', bound='DatabaseAdapter')

logger = get_logger('queries')

_ADAPTERS: dict[str, type[DatabaseAdapter]] = {}


class DatabaseAdapter:
    """
    Generic SQL statement builder.

    Subclasses set ``name``/``description``, flip the capability flags they
    support and override the matching ``_build_*`` hooks.
    """

    name: ClassVar[str] = ''
    description: ClassVar[str] = ''

    supports_upsert: ClassVar[bool] = False
    supports_insert_ignore: ClassVar[bool] = False

    @classmethod
    def from_settings(cls, settings: Settings) -> DatabaseAdapter:
        """Build an adapter from application settings."""
        return cls()

    def __repr__(self) -> str:
        return f'{type(self).__name__}()'

    @property
    def times_to_add_column_objects_for_upsert(self) -> int:
        """
        How many times the column values are bound into an UPSERT statement.

        Returns:
            1 for dialects binding each value once, -1 if UPSERT is unsupported.
        """
        return 1 if self.supports_upsert else -1

    @log_function_call(log_args=True, log_result=True)
    def get_select_statement(
        self,
        table_name: str,
        column_names: str | None = None,
        where_clause: str | None = None,
        order_by_clause: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
        column_for_partitioning: str | None = None,
    ) -> str:
        """
        Return a SELECT statement with the given clauses applied.

        Args:
            table_name: Table to fetch rows from.
            column_names: Projection; None, empty or ``*`` selects all columns.
            where_clause: Filter without the WHERE keyword.
            order_by_clause: Ordering without the ORDER BY keywords.
            limit: Number of rows to return.
            offset: Number of rows to skip. ``offset + limit`` must fit the
                target database's integer range.
            column_for_partitioning: If given, limit and offset bound values
                of this column instead of row numbers, and ORDER BY is dropped.

        Returns:
            SQL SELECT statement.

        Raises:
            InvalidArgumentError: If table_name is None or empty.
        """
        require_argument(bool(table_name), 'Table name cannot be None or empty')
        return self._build_select(
            table_name,
            column_names,
            where_clause,
            order_by_clause,
            limit,
            offset,
            column_for_partitioning or None,
        )

    @log_function_call(log_args=True, log_result=True)
    def get_upsert_statement(
        self,
        table: str,
        column_names: ColumnNames,
        unique_key_column_names: KeyColumnNames,
    ) -> str:
        """
        Return a parameterized UPSERT statement (update, or insert if missing).

        Check ``supports_upsert`` before calling. Placeholders follow the
        order of column_names; bind the values
        ``times_to_add_column_objects_for_upsert`` times.

        Raises:
            UnsupportedOperationError: If the adapter has no UPSERT.
            InvalidArgumentError: If table, columns or key columns are empty.
        """
        if not self.supports_upsert:
            logger.warning('UPSERT requested from adapter %s', self.name)
            raise UnsupportedOperationError('UPSERT', self.name)
        _check_write_arguments(table, column_names, unique_key_column_names)
        return self._build_upsert(table, list(column_names), list(unique_key_column_names))

    @log_function_call(log_args=True, log_result=True)
    def get_insert_ignore_statement(
        self,
        table: str,
        column_names: ColumnNames,
        unique_key_column_names: KeyColumnNames,
    ) -> str:
        """
        Return a parameterized INSERT statement that skips conflicting rows.

        Check ``supports_insert_ignore`` before calling. Placeholders follow
        the order of column_names.

        Raises:
            UnsupportedOperationError: If the adapter has no INSERT-IGNORE.
            InvalidArgumentError: If table, columns or key columns are empty.
        """
        if not self.supports_insert_ignore:
            logger.warning('INSERT_IGNORE requested from adapter %s', self.name)
            raise UnsupportedOperationError('INSERT_IGNORE', self.name)
        _check_write_arguments(table, column_names, unique_key_column_names)
        return self._build_insert_ignore(
            table, list(column_names), list(unique_key_column_names)
        )

    def unwrap_identifier(self, identifier: str | None) -> str | None:
        """Strip double-quote escapes from an identifier; None stays None."""
        return None if identifier is None else identifier.replace('"', '')

    def get_table_alias_clause(self, table_name: str) -> str:
        return f'AS {table_name}'

    # Dialect hooks

    def _build_select(
        self,
        table_name: str,
        column_names: str | None,
        where_clause: str | None,
        order_by_clause: str | None,
        limit: int | None,
        offset: int | None,
        column_for_partitioning: str | None,
    ) -> str:
        query = select_body(
            table_name,
            column_names,
            where_clause,
            order_by_clause,
            limit,
            offset,
            column_for_partitioning,
        )
        if column_for_partitioning is None:
            query += self._limit_clause(limit, offset)
        return query

    def _limit_clause(self, limit: int | None, offset: int | None) -> str:
        clause = ''
        if limit is not None:
            clause += f' LIMIT {limit}'
        if offset is not None and offset > 0:
            clause += f' OFFSET {offset}'
        return clause

    def _build_upsert(
        self,
        table: str,
        column_names: list[str],
        unique_key_column_names: list[str],
    ) -> str:
        raise UnsupportedOperationError('UPSERT', self.name)

    def _build_insert_ignore(
        self,
        table: str,
        column_names: list[str],
        unique_key_column_names: list[str],
    ) -> str:
        raise UnsupportedOperationError('INSERT_IGNORE', self.name)


def _check_write_arguments(
    table: str,
    column_names: ColumnNames | None,
    unique_key_column_names: KeyColumnNames | None,
) -> None:
    require_argument(bool(table), 'Table name cannot be None or blank')
    require_argument(bool(column_names), 'Column names cannot be None or empty')
    require_argument(bool(unique_key_column_names), 'Key column names cannot be None or empty')


def projection(column_names: str | None) -> str:
    """Return the SELECT list, ``*`` when no explicit projection is given."""
    if not column_names or column_names.strip() == '*':
        return '*'
    return column_names


def select_body(
    table_name: str,
    column_names: str | None,
    where_clause: str | None,
    order_by_clause: str | None,
    limit: int | None,
    offset: int | None,
    column_for_partitioning: str | None,
) -> str:
    """
    Compose ``SELECT ... FROM ... [WHERE ...] [ORDER BY ...]``.

    With a partition column, range predicates are appended to an existing
    WHERE clause and ORDER BY is left out.
    """
    query = f'SELECT {projection(column_names)} FROM {table_name}'

    if where_clause:
        query += f' WHERE {where_clause}'
        if column_for_partitioning:
            lower = offset if offset is not None else 0
            query += f' AND {column_for_partitioning} >= {lower}'
            if limit is not None:
                query += f' AND {column_for_partitioning} < {lower + limit}'

    if order_by_clause and not column_for_partitioning:
        query += f' ORDER BY {order_by_clause}'
    return query


def placeholders(count: int) -> str:
    return ', '.join('?' * count)


def register_adapter(cls: type[A]) -> type[A]:
    """
    Class decorator adding an adapter to the registry under ``cls.name``.

    Raises:
        AdapterRegistrationError: If the name is empty or already taken.
    """
    if not cls.name:
        raise AdapterRegistrationError(f'{cls.__name__} has no adapter name')

    key = cls.name.casefold()
    registered = _ADAPTERS.get(key)
    if registered is not None and registered is not cls:
        raise AdapterRegistrationError(
            f"Adapter name '{cls.name}' is already used by {registered.__name__}"
        )
    _ADAPTERS[key] = cls
    logger.debug('Registered adapter %s (%s)', cls.name, cls.__name__)
    return cls


def get_adapter_class(name: str) -> type[DatabaseAdapter]:
    """
    Look up a registered adapter class by name, ignoring case.

    Raises:
        UnknownAdapterError: If no adapter is registered under name.
    """
    adapter_cls = _ADAPTERS.get(name.strip().casefold()) if name else None
    if adapter_cls is None:
        raise UnknownAdapterError(name, [cls.name for cls in _ADAPTERS.values()])
    return adapter_cls


def get_adapter(name: str, **options: object) -> DatabaseAdapter:
    """
    Return a new adapter instance for a dialect name such as ``'Oracle'``.

    Args:
        name: Registered adapter name (case-insensitive).
        **options: Keyword arguments for the adapter constructor.

    Raises:
        UnknownAdapterError: If no adapter is registered under name.
    """
    return get_adapter_class(name)(**options)


def available_adapters() -> Mapping[str, str]:
    """Registered adapter names mapped to their descriptions."""
    return {cls.name: cls.description for cls in _ADAPTERS.values()}


def create_adapter(settings: Settings) -> DatabaseAdapter:
    """Build the adapter named by ``settings.database_adapter``."""
    adapter = get_adapter_class(settings.database_adapter).from_settings(settings)
    logger.info('Using database adapter %s', adapter.name)
    return adapter
