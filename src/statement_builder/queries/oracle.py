# queries/oracle.py
"""Oracle-specific statement generation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final, Literal, TypeAlias, cast

from statement_builder.error_handler import InvalidArgumentError, require_argument
from statement_builder.logger import get_logger
from statement_builder.queries.base import (
    DatabaseAdapter,
    placeholders,
    projection,
    register_adapter,
    select_body,
)

if TYPE_CHECKING:
    from statement_builder.env_config import Settings

InsertIgnoreStyle: TypeAlias = Literal['merge', 'hint', 'on_conflict']

INSERT_IGNORE_STYLES: Final[frozenset[str]] = frozenset(('merge', 'hint', 'on_conflict'))

logger = get_logger('queries.oracle')


@register_adapter
class OracleDatabaseAdapter(DatabaseAdapter):
    """
    Adapter generating Oracle compliant SQL.

    Paging uses the nested ROWNUM pattern, UPSERT is a MERGE against a
    one-row ``dual`` source. INSERT-IGNORE has three renderings:

    - ``merge``: MERGE with only a WHEN NOT MATCHED branch.
    - ``hint``: INSERT with the IGNORE_ROW_ON_DUPKEY_INDEX hint.
    - ``on_conflict``: ``ON CONFLICT ... DO NOTHING``. Oracle rejects it;
      kept for hosts that already depend on that text.
    """

    name = 'Oracle'
    description = 'Generates Oracle compliant SQL'

    supports_upsert = True
    supports_insert_ignore = True

    def __init__(self, insert_ignore_style: InsertIgnoreStyle = 'merge') -> None:
        require_argument(
            insert_ignore_style in INSERT_IGNORE_STYLES,
            f'Unknown insert ignore style: {insert_ignore_style!r}',
        )
        if insert_ignore_style == 'on_conflict':
            logger.warning(
                'ON CONFLICT is not Oracle syntax; INSERT_IGNORE statements will fail on Oracle'
            )
        self.insert_ignore_style = insert_ignore_style

    @classmethod
    def from_settings(cls, settings: Settings) -> OracleDatabaseAdapter:
        return cls(insert_ignore_style=cast(InsertIgnoreStyle, settings.oracle_insert_ignore_style))

    def __repr__(self) -> str:
        return f'{type(self).__name__}(insert_ignore_style={self.insert_ignore_style!r})'

    def get_table_alias_clause(self, table_name: str) -> str:
        # Oracle does not accept AS before a table alias
        return table_name

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
        inner = select_body(
            table_name,
            column_names,
            where_clause,
            order_by_clause,
            limit,
            offset,
            column_for_partitioning,
        )
        if (limit is None and offset is None) or column_for_partitioning:
            return inner

        # ROWNUM is assigned before ORDER BY, so page over a nested query
        lower = offset if offset is not None else 0
        query = f'SELECT {projection(column_names)} FROM (SELECT a.*, ROWNUM rnum FROM ({inner}) a'
        if limit is not None:
            query += f' WHERE ROWNUM <= {lower + limit}'
        return query + f') WHERE rnum > {lower}'

    def _build_upsert(
        self,
        table: str,
        column_names: list[str],
        unique_key_column_names: list[str],
    ) -> str:
        # Key columns only take part in the match condition
        non_key_columns = [c for c in column_names if c not in unique_key_column_names]

        statement = f'MERGE INTO {table} t1{_dual_source(column_names)}{_match_condition(unique_key_column_names)}'
        if non_key_columns:
            update_set = ', '.join(f't1.{c} = t2.{c}' for c in non_key_columns)
            statement += f' WHEN MATCHED THEN UPDATE SET {update_set}'
        return statement + _insert_branch(non_key_columns or column_names)

    def _build_insert_ignore(
        self,
        table: str,
        column_names: list[str],
        unique_key_column_names: list[str],
    ) -> str:
        columns = ', '.join(column_names)
        keys = ', '.join(unique_key_column_names)
        values = placeholders(len(column_names))

        match self.insert_ignore_style:
            case 'merge':
                return (
                    f'MERGE INTO {table} t1{_dual_source(column_names)}'
                    f'{_match_condition(unique_key_column_names)}{_insert_branch(column_names)}'
                )
            case 'hint':
                return (
                    f'INSERT /*+ IGNORE_ROW_ON_DUPKEY_INDEX({table}({keys})) */ '
                    f'INTO {table}({columns}) VALUES ({values})'
                )
            case 'on_conflict':
                return (
                    f'INSERT INTO {table}({columns}) VALUES ({values}) '
                    f'ON CONFLICT ({keys}) DO NOTHING'
                )
            case _:
                raise InvalidArgumentError(
                    f'Unknown insert ignore style: {self.insert_ignore_style!r}'
                )


def _dual_source(column_names: list[str]) -> str:
    """One-row source binding every column once, in column order."""
    bound = ', '.join(f'? {c}' for c in column_names)
    return f' USING (SELECT {bound} FROM dual) t2'


def _match_condition(unique_key_column_names: list[str]) -> str:
    condition = ' AND '.join(f't1.{c} = t2.{c}' for c in unique_key_column_names)
    return f' ON ({condition})'


def _insert_branch(column_names: list[str]) -> str:
    targets = ', '.join(f't1.{c}' for c in column_names)
    sources = ', '.join(f't2.{c}' for c in column_names)
    return f' WHEN NOT MATCHED THEN INSERT ({targets}) VALUES ({sources})'
