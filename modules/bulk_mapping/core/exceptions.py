"""
Custom exceptions for bulk mapping module.
"""

from typing import Any


class BulkMappingException(Exception):
    """Base exception for bulk mapping module."""
    pass


class ConfigurationError(BulkMappingException):
    """Exception raised for an invalid or missing record type or override config."""
    pass


class UnsupportedTypeError(BulkMappingException):
    """Exception raised when no default storage type exists for a native type."""

    def __init__(self, native_type: Any, message: str = ""):
        self.native_type = native_type
        super().__init__(message or f"No default PostgreSQL data type for native type {native_type!r}")


class UnresolvableTypeError(UnsupportedTypeError):
    """Exception raised when a mapped field has neither an override nor a default type."""

    def __init__(self, field_name: str, native_type: Any):
        self.field_name = field_name
        super().__init__(
            native_type,
            f"Cannot resolve a data type for field '{field_name}' "
            f"(native type {native_type!r}): no override and no default mapping"
        )


class MissingAccessorError(BulkMappingException):
    """Exception raised in strict mode when a mapped field has no accessor."""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"No zero-argument accessor found for mapped field '{field_name}'")


class ExtractionInvocationError(BulkMappingException):
    """Exception raised when reading a column value from a record fails."""

    def __init__(self, column_name: str, cause: BaseException):
        self.column_name = column_name
        self.cause = cause
        super().__init__(
            f"Failed to extract column '{column_name}': {type(cause).__name__}: {cause}"
        )


class ConverterNotFoundException(BulkMappingException):
    """Exception raised when no value converter is registered for a data type."""
    pass
