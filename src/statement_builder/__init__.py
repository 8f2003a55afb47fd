"""
Statement Builder.

Dialect-specific SQL generation (paginated SELECT, UPSERT, INSERT-IGNORE)
for data-ingestion processors that execute the statements themselves.
"""

from __future__ import annotations

from statement_builder.error_handler import (
    InvalidArgumentError,
    StatementBuilderError,
    UnknownAdapterError,
    UnsupportedOperationError,
)
from statement_builder.queries import (
    DatabaseAdapter,
    available_adapters,
    create_adapter,
    get_adapter,
)

__version__ = '1.0.0'

__all__ = [
    'DatabaseAdapter',
    'InvalidArgumentError',
    'StatementBuilderError',
    'UnknownAdapterError',
    'UnsupportedOperationError',
    'available_adapters',
    'create_adapter',
    'get_adapter',
]
