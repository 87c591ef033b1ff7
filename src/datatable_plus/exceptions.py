"""Exception types raised by datatable_plus."""

from __future__ import annotations


class DataTablePlusError(Exception):
    """Base class for all datatable_plus errors."""


class InvalidArgumentError(DataTablePlusError, ValueError):
    """An argument was None, blank, or otherwise unusable."""

    def __init__(self, param_name: str, message: str):
        self.param_name = param_name
        super().__init__(f"{param_name} {message}")

    @classmethod
    def null(cls, param_name: str) -> InvalidArgumentError:
        return cls(param_name, "must not be None")

    @classmethod
    def null_or_whitespace(cls, param_name: str) -> InvalidArgumentError:
        return cls(param_name, "must not be None or whitespace")


class ServiceClosedError(DataTablePlusError, RuntimeError):
    """An operation was requested on a service that was already closed."""


class UnsupportedDialectError(DataTablePlusError, KeyError):
    """No catalog query is known for the connection's dialect."""

    def __init__(self, dialect: str):
        self.dialect = dialect
        super().__init__(dialect)

    def __str__(self) -> str:
        return f"No catalog query registered for dialect: {self.dialect}"


class ConfigError(DataTablePlusError):
    """Settings or mapping files are missing or malformed."""
