"""
Explicit record descriptions.

A RecordDescription is the static field table the mapping builder works
from: every field with its native type, mapping flags and the accessors
available to read it. Front ends (dataclasses, SQLAlchemy models) produce
one; callers can also declare one by hand with the builder API.
"""

import types
import typing
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple

from modules.bulk_mapping.core.types import DataType, EnumStorageMode

# Metadata keys shared by the dataclass and SQLAlchemy front ends
COLUMN_KEY = "bulk_column"
DATA_TYPE_KEY = "bulk_data_type"
ENUM_MODE_KEY = "bulk_enum_mode"
MAPPED_KEY = "bulk_mapped"


def unwrap_optional(native_type: Any) -> Any:
    """Optional[X] / X | None -> X. Anything else is returned unchanged."""
    origin = typing.get_origin(native_type)
    if origin is typing.Union or origin is getattr(types, "UnionType", None):
        args = [arg for arg in typing.get_args(native_type) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return native_type


def is_enum_type(native_type: Any) -> bool:
    native_type = unwrap_optional(native_type)
    return isinstance(native_type, type) and issubclass(native_type, Enum)


@dataclass(frozen=True)
class Accessor:
    """A zero-argument reader: given a record, returns one value."""
    name: str
    read: Callable[[Any], Any] = field(compare=False, repr=False)

    def __call__(self, record: Any) -> Any:
        return self.read(record)


@dataclass(frozen=True)
class FieldDescription:
    """One field of a record type and its mapping metadata."""
    name: str
    native_type: Any
    mapped: bool = True
    column_name: Optional[str] = None
    declared_type: Optional[DataType] = None
    enum_mode: Optional[EnumStorageMode] = None

    @property
    def column(self) -> str:
        """Target column name (defaults to the field name)."""
        return self.column_name or self.name

    @property
    def value_type(self) -> Any:
        return unwrap_optional(self.native_type)

    @property
    def is_enum(self) -> bool:
        return is_enum_type(self.native_type)


@dataclass(frozen=True)
class RecordDescription:
    """
    Static description of a record type.

    Fields and accessors keep declaration order; the builder emits columns
    in that order.
    """
    record_class: Optional[type]
    fields: Tuple[FieldDescription, ...]
    accessors: Tuple[Accessor, ...]
    schema_name: str = ""
    table_name: str = ""

    @property
    def name(self) -> str:
        if self.record_class is not None:
            return self.record_class.__name__
        return self.table_name or "<record>"

    @property
    def mapped_fields(self) -> List[FieldDescription]:
        return [f for f in self.fields if f.mapped]

    @staticmethod
    def builder(
        record_class: Optional[type] = None,
        table: str = "",
        schema: str = ""
    ) -> "RecordDescriptionBuilder":
        return RecordDescriptionBuilder(record_class, table, schema)


class RecordDescriptionBuilder:
    """
    Fluent builder for a RecordDescription.

    Example:
        >>> description = (
        ...     RecordDescription.builder(Order, table="orders", schema="sales")
        ...     .field("id", int, accessor=lambda o: o.id)
        ...     .field("status", Status, enum_mode=EnumStorageMode.NAME,
        ...            accessor=lambda o: o.status)
        ...     .build()
        ... )
    """

    def __init__(self, record_class: Optional[type] = None, table: str = "", schema: str = ""):
        self._record_class = record_class
        self._table = table
        self._schema = schema
        self._fields: List[FieldDescription] = []
        self._accessors: List[Accessor] = []

    def table(self, name: str, schema: str = "") -> "RecordDescriptionBuilder":
        self._table = name
        self._schema = schema
        return self

    def field(
        self,
        name: str,
        native_type: Any,
        *,
        column: Optional[str] = None,
        mapped: bool = True,
        data_type: Optional[DataType] = None,
        enum_mode: Optional[EnumStorageMode] = None,
        accessor: Optional[Callable[[Any], Any]] = None
    ) -> "RecordDescriptionBuilder":
        """
        Add a field.

        Args:
            name: Field name (accessors are matched against it)
            native_type: Python type of the field's values
            column: Target column name, defaults to the field name
            mapped: Whether the field becomes a column
            data_type: Declared storage type for the column
            enum_mode: Ordinal or name storage for enum fields
            accessor: Optional reader, registered as an accessor named after the field
        """
        self._fields.append(FieldDescription(
            name=name,
            native_type=native_type,
            mapped=mapped,
            column_name=column,
            declared_type=DataType(data_type) if data_type is not None else None,
            enum_mode=EnumStorageMode(enum_mode) if enum_mode is not None else None,
        ))
        if accessor is not None:
            self._accessors.append(Accessor(name, accessor))
        return self

    def accessor(self, name: str, read: Callable[[Any], Any]) -> "RecordDescriptionBuilder":
        self._accessors.append(Accessor(name, read))
        return self

    def build(self) -> RecordDescription:
        return RecordDescription(
            record_class=self._record_class,
            fields=tuple(self._fields),
            accessors=tuple(self._accessors),
            schema_name=self._schema,
            table_name=self._table,
        )
