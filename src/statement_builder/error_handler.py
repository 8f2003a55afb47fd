# error_handler.py
"""Error kinds raised while building SQL statements."""

from __future__ import annotations


class StatementBuilderError(Exception):
    """Base statement builder error."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.original_error = original_error


class InvalidArgumentError(StatementBuilderError, ValueError):
    """Required input (table, columns, key columns) is missing or empty."""


class UnsupportedOperationError(StatementBuilderError, NotImplementedError):
    """Adapter does not implement the requested statement kind."""

    def __init__(self, operation: str, adapter_name: str):
        super().__init__(f'{operation} is not supported for {adapter_name}')
        self.operation = operation
        self.adapter_name = adapter_name


class UnknownAdapterError(StatementBuilderError, LookupError):
    """No adapter registered under the requested name."""

    def __init__(self, name: str, known: list[str]):
        known_names = ', '.join(known) or '<none>'
        super().__init__(f"Unknown database adapter '{name}'. Available adapters: {known_names}")
        self.name = name
        self.known = known


class AdapterRegistrationError(StatementBuilderError):
    """Adapter name is missing or already registered."""


def require_argument(condition: bool, message: str) -> None:
    """
    Raise InvalidArgumentError unless condition holds.

    Args:
        condition: Precondition that must be true.
        message: Error message used when it is not.

    Raises:
        InvalidArgumentError: If condition is false.
    """
    if not condition:
        raise InvalidArgumentError(message)
