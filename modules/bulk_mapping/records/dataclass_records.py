"""
Dataclass front end.

Mark dataclass fields as columns with bulk_column(); the target table
comes from the @table decorator.
"""

import dataclasses
import typing
from typing import Any, Dict, Optional

from modules.bulk_mapping.core.exceptions import ConfigurationError
from modules.bulk_mapping.core.types import DataType, EnumStorageMode
from modules.bulk_mapping.records.description import (
    COLUMN_KEY,
    DATA_TYPE_KEY,
    ENUM_MODE_KEY,
    MAPPED_KEY,
    FieldDescription,
    RecordDescription,
)
from modules.bulk_mapping.records.introspection import (
    collect_accessors,
    get_schema_name,
    get_table_name,
)


def bulk_column(
    column: Optional[str] = None,
    *,
    data_type: Optional[DataType] = None,
    enum_mode: Optional[EnumStorageMode] = None,
    **field_kwargs: Any
) -> Any:
    """
    Declare a dataclass field as a mapped column.

    Args:
        column: Target column name, defaults to the field name
        data_type: Declared storage type, overrides inference
        enum_mode: Ordinal or name storage for enum fields
        **field_kwargs: Passed through to dataclasses.field (default, ...)

    Usage:
        @table("unit_test", schema="sample")
        @dataclass
        class UnitTest:
            id: int = bulk_column("id")
            status: Status = bulk_column(enum_mode=EnumStorageMode.ORDINAL)
    """
    metadata: Dict[str, Any] = dict(field_kwargs.pop("metadata", None) or {})
    metadata[MAPPED_KEY] = True
    if column is not None:
        metadata[COLUMN_KEY] = column
    if data_type is not None:
        metadata[DATA_TYPE_KEY] = DataType(data_type)
    if enum_mode is not None:
        metadata[ENUM_MODE_KEY] = EnumStorageMode(enum_mode)
    return dataclasses.field(metadata=metadata, **field_kwargs)


def describe_dataclass(cls: type, localns: Optional[Dict[str, Any]] = None) -> RecordDescription:
    """
    Build a RecordDescription from a dataclass.

    String annotations (including every annotation under
    `from __future__ import annotations`) are resolved against the module
    globals of cls. Types defined inside a function are not visible there;
    pass them in localns, e.g. describe_dataclass(Order, localns=locals()).

    Args:
        cls: Dataclass type
        localns: Extra names for resolving string annotations

    Raises:
        ConfigurationError: If cls is not a dataclass or its hints cannot be resolved
    """
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise ConfigurationError(f"{cls!r} is not a dataclass type")

    try:
        hints = typing.get_type_hints(cls, localns=localns)
    except (NameError, TypeError) as e:
        raise ConfigurationError(
            f"Cannot resolve type hints of {cls.__name__}: {e}. "
            f"Types local to a function must be passed via localns"
        ) from e

    fields = []
    for dc_field in dataclasses.fields(cls):
        metadata = dc_field.metadata
        declared_type = metadata.get(DATA_TYPE_KEY)
        enum_mode = metadata.get(ENUM_MODE_KEY)
        fields.append(FieldDescription(
            name=dc_field.name,
            native_type=hints.get(dc_field.name, dc_field.type),
            mapped=bool(metadata.get(MAPPED_KEY, False)),
            column_name=metadata.get(COLUMN_KEY),
            declared_type=DataType(declared_type) if declared_type is not None else None,
            enum_mode=EnumStorageMode(enum_mode) if enum_mode is not None else None,
        ))

    return RecordDescription(
        record_class=cls,
        fields=tuple(fields),
        accessors=collect_accessors(cls, [f.name for f in fields]),
        schema_name=get_schema_name(cls),
        table_name=get_table_name(cls),
    )
