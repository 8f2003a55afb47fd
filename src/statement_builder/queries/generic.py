# queries/generic.py
"""Generic ANSI SQL adapter."""

from __future__ import annotations

from statement_builder.queries.base import DatabaseAdapter, register_adapter


@register_adapter
class GenericDatabaseAdapter(DatabaseAdapter):
    """SELECT with LIMIT/OFFSET paging; no UPSERT or INSERT-IGNORE."""

    name = 'Generic'
    description = 'Generates ANSI SQL'
