# queries/__init__.py
"""SQL statement adapters for Generic, Oracle, PostgreSQL and MySQL dialects."""

from statement_builder.queries.base import (
    DatabaseAdapter,
    available_adapters,
    create_adapter,
    get_adapter,
    get_adapter_class,
    register_adapter,
)
from statement_builder.queries.generic import GenericDatabaseAdapter
from statement_builder.queries.mysql import MySQLDatabaseAdapter
from statement_builder.queries.oracle import OracleDatabaseAdapter
from statement_builder.queries.postgresql import PostgreSQLDatabaseAdapter

__all__ = [
    'DatabaseAdapter',
    'GenericDatabaseAdapter',
    'MySQLDatabaseAdapter',
    'OracleDatabaseAdapter',
    'PostgreSQLDatabaseAdapter',
    'available_adapters',
    'create_adapter',
    'get_adapter',
    'get_adapter_class',
    'register_adapter',
]
