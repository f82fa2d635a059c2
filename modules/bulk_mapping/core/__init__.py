"""
Core components for bulk mapping module.
"""

from modules.bulk_mapping.core.types import (
    DataType,
    EnumStorageMode,
    ColumnDescriptor,
    Descriptor,
    TaggedValue,
    quote_identifier,
)

from modules.bulk_mapping.core.interfaces import IValueConverter

from modules.bulk_mapping.core.registry import (
    ConverterRegistry,
    register_converter,
)

from modules.bulk_mapping.core.exceptions import (
    BulkMappingException,
    ConfigurationError,
    UnsupportedTypeError,
    UnresolvableTypeError,
    MissingAccessorError,
    ExtractionInvocationError,
    ConverterNotFoundException,
)

__all__ = [
    # Types
    "DataType",
    "EnumStorageMode",
    "ColumnDescriptor",
    "Descriptor",
    "TaggedValue",
    "quote_identifier",
    # Interfaces
    "IValueConverter",
    # Registries
    "ConverterRegistry",
    "register_converter",
    # Exceptions
    "BulkMappingException",
    "ConfigurationError",
    "UnsupportedTypeError",
    "UnresolvableTypeError",
    "MissingAccessorError",
    "ExtractionInvocationError",
    "ConverterNotFoundException",
]
