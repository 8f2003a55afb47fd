# queries/postgresql.py
"""PostgreSQL-specific statement generation."""

from __future__ import annotations

from statement_builder.queries.base import DatabaseAdapter, placeholders, register_adapter


@register_adapter
class PostgreSQLDatabaseAdapter(DatabaseAdapter):
    """PostgreSQL adapter: ``INSERT ... ON CONFLICT`` for UPSERT and INSERT-IGNORE."""

    name = 'PostgreSQL'
    description = 'Generates PostgreSQL compliant SQL'

    supports_upsert = True
    supports_insert_ignore = True

    def _build_upsert(
        self,
        table: str,
        column_names: list[str],
        unique_key_column_names: list[str],
    ) -> str:
        non_key_columns = [c for c in column_names if c not in unique_key_column_names]
        statement = _insert_on_conflict(table, column_names, unique_key_column_names)
        if not non_key_columns:
            return statement + ' DO NOTHING'

        update_set = ', '.join(f'{c} = EXCLUDED.{c}' for c in non_key_columns)
        return statement + f' DO UPDATE SET {update_set}'

    def _build_insert_ignore(
        self,
        table: str,
        column_names: list[str],
        unique_key_column_names: list[str],
    ) -> str:
        return _insert_on_conflict(table, column_names, unique_key_column_names) + ' DO NOTHING'


def _insert_on_conflict(
    table: str,
    column_names: list[str],
    unique_key_column_names: list[str],
) -> str:
    columns = ', '.join(column_names)
    keys = ', '.join(unique_key_column_names)
    return (
        f'INSERT INTO {table}({columns}) VALUES ({placeholders(len(column_names))}) '
        f'ON CONFLICT ({keys})'
    )
