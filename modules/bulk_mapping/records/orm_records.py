"""
SQLAlchemy declarative model front end.

Every column attribute of a mapped class is a mapped column unless its
Column.info sets bulk_mapped=False. Declared types and enum modes are read
from Column.info as well:

    status = Column(Enum(Status), info={"bulk_data_type": DataType.BIGINT,
                                        "bulk_enum_mode": EnumStorageMode.ORDINAL})
"""

from typing import Any, Optional

from sqlalchemy import Column
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import NoInspectionAvailable
from sqlalchemy.orm import Mapper

from modules.bulk_mapping.core.exceptions import ConfigurationError
from modules.bulk_mapping.core.types import DataType, EnumStorageMode
from modules.bulk_mapping.records.description import (
    DATA_TYPE_KEY,
    ENUM_MODE_KEY,
    MAPPED_KEY,
    FieldDescription,
    RecordDescription,
)
from modules.bulk_mapping.records.introspection import collect_accessors
from shared.utils.logger import setup_logger

logger = setup_logger(__name__)


def get_mapper(cls: Any) -> Optional[Mapper]:
    """Return the SQLAlchemy mapper of a mapped class, or None."""
    if not isinstance(cls, type):
        return None
    try:
        mapper = sa_inspect(cls)
    except NoInspectionAvailable:
        return None
    return mapper if isinstance(mapper, Mapper) else None


def _native_type(column: Any) -> Any:
    enum_class = getattr(column.type, "enum_class", None)
    if enum_class is not None:
        return enum_class
    try:
        return column.type.python_type
    except NotImplementedError:
        # Left for the type resolver to reject unless an override exists
        return column.type


def describe_model(cls: type) -> RecordDescription:
    """
    Build a RecordDescription from a SQLAlchemy declarative model.

    Raises:
        ConfigurationError: If cls is not a mapped class
    """
    mapper = get_mapper(cls)
    if mapper is None:
        raise ConfigurationError(f"{cls!r} is not a SQLAlchemy mapped class")

    table = mapper.local_table
    fields = []
    for attr in mapper.column_attrs:
        column = attr.columns[0]
        # column_property() expressions are not table columns
        if not isinstance(column, Column) or column.table is not table:
            logger.debug(f"Skipping non-column attribute {cls.__name__}.{attr.key}")
            continue

        info = column.info
        native_type = _native_type(column)

        enum_mode = info.get(ENUM_MODE_KEY)
        if enum_mode is None and getattr(column.type, "enum_class", None) is not None:
            # SQLAlchemy's Enum type persists member names
            enum_mode = EnumStorageMode.NAME

        declared_type = info.get(DATA_TYPE_KEY)
        fields.append(FieldDescription(
            name=attr.key,
            native_type=native_type,
            mapped=bool(info.get(MAPPED_KEY, True)),
            column_name=column.name,
            declared_type=DataType(declared_type) if declared_type is not None else None,
            enum_mode=EnumStorageMode(enum_mode) if enum_mode is not None else None,
        ))

    logger.debug(f"Described model {cls.__name__} with {len(fields)} column attributes")

    return RecordDescription(
        record_class=cls,
        fields=tuple(fields),
        accessors=collect_accessors(cls, [f.name for f in fields]),
        schema_name=getattr(table, "schema", None) or "",
        table_name=getattr(table, "name", "") or "",
    )
