"""
Bulk mapping module.

Builds immutable column mappings (name, PostgreSQL data type, extractor)
from record types, for binary COPY bulk writers.

Example:
    >>> from modules.bulk_mapping import build_mapping, bulk_column, table
    >>> descriptor = build_mapping(UnitTest)
    >>> [c.name for c in descriptor]
    ['id', 'status', 'label']
"""

from modules.bulk_mapping.core import (
    BulkMappingException,
    ColumnDescriptor,
    ConfigurationError,
    ConverterRegistry,
    DataType,
    Descriptor,
    EnumStorageMode,
    ExtractionInvocationError,
    IValueConverter,
    MissingAccessorError,
    TaggedValue,
    UnresolvableTypeError,
    UnsupportedTypeError,
    register_converter,
)
from modules.bulk_mapping.records import (
    RecordDescription,
    describe_record,
    bulk_column,
    table,
)
from modules.bulk_mapping.mapping import (
    MappingBuilder,
    TypeResolver,
    build_mapping,
    load_overrides,
)

# Import converters to trigger self-registration
import modules.bulk_mapping.converters  # noqa: F401

__all__ = [
    "BulkMappingException",
    "ColumnDescriptor",
    "ConfigurationError",
    "ConverterRegistry",
    "DataType",
    "Descriptor",
    "EnumStorageMode",
    "ExtractionInvocationError",
    "IValueConverter",
    "MappingBuilder",
    "MissingAccessorError",
    "RecordDescription",
    "TaggedValue",
    "TypeResolver",
    "UnresolvableTypeError",
    "UnsupportedTypeError",
    "build_mapping",
    "describe_record",
    "load_overrides",
    "bulk_column",
    "register_converter",
    "table",
]
