# queries/mysql.py
"""MySQL-specific statement generation."""

from __future__ import annotations

from typing import Final

from statement_builder.queries.base import DatabaseAdapter, placeholders, register_adapter

# MySQL has no OFFSET without LIMIT; this is the documented "all rows" value
MAX_ROW_COUNT: Final[int] = 18446744073709551615


@register_adapter
class MySQLDatabaseAdapter(DatabaseAdapter):
    """
    MySQL adapter.

    UPSERT uses ``ON DUPLICATE KEY UPDATE col = VALUES(col)`` over the
    non-key columns, so each column value is bound once.
    """

    name = 'MySQL'
    description = 'Generates MySQL compatible SQL'

    supports_upsert = True
    supports_insert_ignore = True

    def unwrap_identifier(self, identifier: str | None) -> str | None:
        """Strip backtick and double-quote escapes from an identifier."""
        return None if identifier is None else identifier.replace('`', '').replace('"', '')

    def _limit_clause(self, limit: int | None, offset: int | None) -> str:
        if limit is None and offset:
            return f' LIMIT {MAX_ROW_COUNT} OFFSET {offset}'
        return super()._limit_clause(limit, offset)

    def _build_upsert(
        self,
        table: str,
        column_names: list[str],
        unique_key_column_names: list[str],
    ) -> str:
        non_key_columns = [c for c in column_names if c not in unique_key_column_names]
        if not non_key_columns:
            return self._build_insert_ignore(table, column_names, unique_key_column_names)

        columns = ', '.join(column_names)
        update_set = ', '.join(f'{c} = VALUES({c})' for c in non_key_columns)
        return (
            f'INSERT INTO {table}({columns}) VALUES ({placeholders(len(column_names))}) '
            f'ON DUPLICATE KEY UPDATE {update_set}'
        )

    def _build_insert_ignore(
        self,
        table: str,
        column_names: list[str],
        unique_key_column_names: list[str],
    ) -> str:
        columns = ', '.join(column_names)
        return f'INSERT IGNORE INTO {table}({columns}) VALUES ({placeholders(len(column_names))})'
