"""
Default storage types for native Python types.
"""

import ipaddress
import typing
import uuid
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from modules.bulk_mapping.core.exceptions import UnsupportedTypeError
from modules.bulk_mapping.core.types import DataType
from modules.bulk_mapping.records.description import unwrap_optional

DEFAULT_TYPE_MAPPING: Mapping[type, DataType] = MappingProxyType({
    bool: DataType.BOOLEAN,
    int: DataType.INTEGER,
    float: DataType.DOUBLE_PRECISION,
    Decimal: DataType.NUMERIC,
    str: DataType.TEXT,
    bytes: DataType.BYTEA,
    bytearray: DataType.BYTEA,
    date: DataType.DATE,
    datetime: DataType.TIMESTAMP,
    time: DataType.TIME,
    timedelta: DataType.INTERVAL,
    uuid.UUID: DataType.UUID,
    dict: DataType.JSONB,
    ipaddress.IPv4Address: DataType.INET,
    ipaddress.IPv6Address: DataType.INET,
    ipaddress.IPv4Network: DataType.CIDR,
    ipaddress.IPv6Network: DataType.CIDR,
})


class TypeResolver:
    """
    Resolves the default PostgreSQL data type of a native type.

    Lookup walks the type's MRO, so a subclass resolves like its nearest
    mapped base (bool is checked before int, datetime before date).
    Instances hold no mutable state and can be shared between threads.

    Example:
        >>> TypeResolver().resolve(int)
        <DataType.INTEGER: 'integer'>
        >>> TypeResolver({int: DataType.BIGINT}).resolve(Optional[int])
        <DataType.BIGINT: 'bigint'>
    """

    def __init__(self, extra_mappings: Optional[Mapping[type, DataType]] = None):
        mapping: Dict[type, DataType] = dict(DEFAULT_TYPE_MAPPING)
        if extra_mappings:
            mapping.update({k: DataType(v) for k, v in extra_mappings.items()})
        self._mapping: Mapping[type, DataType] = MappingProxyType(mapping)

    @property
    def mapping(self) -> Mapping[type, DataType]:
        return self._mapping

    def resolve(self, native_type: Any) -> DataType:
        """
        Resolve a native type to its default data type.

        Raises:
            UnsupportedTypeError: If no mapping exists for the type
        """
        data_type = self.try_resolve(native_type)
        if data_type is None:
            raise UnsupportedTypeError(native_type)
        return data_type

    def try_resolve(self, native_type: Any) -> Optional[DataType]:
        """Like resolve(), but returns None for unsupported types."""
        native_type = unwrap_optional(native_type)
        if not isinstance(native_type, type):
            # Parameterized generics (Dict[str, Any]) resolve by their origin
            native_type = typing.get_origin(native_type)
            if not isinstance(native_type, type):
                return None

        for klass in native_type.__mro__:
            data_type = self._mapping.get(klass)
            if data_type is not None:
                return data_type
        return None


default_type_resolver = TypeResolver()


def resolve(native_type: Any) -> DataType:
    """Resolve with the default mappings."""
    return default_type_resolver.resolve(native_type)
