"""
Record descriptions for the bulk mapping module.

Turns a record type into the static field table the mapping builder reads.
"""

import dataclasses
from typing import Any

from modules.bulk_mapping.core.exceptions import ConfigurationError
from modules.bulk_mapping.records.description import (
    Accessor,
    FieldDescription,
    RecordDescription,
    RecordDescriptionBuilder,
)
from modules.bulk_mapping.records.dataclass_records import describe_dataclass, bulk_column
from modules.bulk_mapping.records.introspection import collect_accessors, table
from modules.bulk_mapping.records.orm_records import describe_model, get_mapper


def describe_record(record_type: Any) -> RecordDescription:
    """
    Get the RecordDescription for a record type.

    Accepts a ready RecordDescription, a dataclass, or a SQLAlchemy
    declarative model.

    Raises:
        ConfigurationError: If record_type is missing or cannot be described
    """
    if record_type is None:
        raise ConfigurationError("A record type is required")

    if isinstance(record_type, RecordDescription):
        return record_type

    if isinstance(record_type, type):
        if get_mapper(record_type) is not None:
            return describe_model(record_type)
        if dataclasses.is_dataclass(record_type):
            return describe_dataclass(record_type)

    raise ConfigurationError(
        f"Cannot describe {record_type!r}: expected a RecordDescription, "
        f"a dataclass or a SQLAlchemy mapped class"
    )


__all__ = [
    "Accessor",
    "FieldDescription",
    "RecordDescription",
    "RecordDescriptionBuilder",
    "collect_accessors",
    "describe_dataclass",
    "describe_model",
    "describe_record",
    "bulk_column",
    "table",
]
