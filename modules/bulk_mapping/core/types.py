"""
Core types for the bulk mapping module.

Storage type tags, column descriptors and the finished Descriptor handed to
bulk writers. Everything here is immutable once built.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple

from sqlalchemy import (
    Table, Column, MetaData, Boolean, CHAR, SmallInteger, Integer, BigInteger,
    Numeric, REAL, Text, String, Date, Time, TIMESTAMP
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import (
    BYTEA, CIDR, DOUBLE_PRECISION, INET, INTERVAL, JSON, JSONB, UUID
)

from modules.bulk_mapping.core.exceptions import ConfigurationError


# ==============================================================================
# TAGS
# ==============================================================================

class DataType(str, Enum):
    """PostgreSQL storage type a column value is encoded as."""
    BOOLEAN = "boolean"
    CHAR = "char"
    SMALLINT = "smallint"
    INTEGER = "integer"
    BIGINT = "bigint"
    NUMERIC = "numeric"
    REAL = "real"
    DOUBLE_PRECISION = "double_precision"
    TEXT = "text"
    VARCHAR = "varchar"
    DATE = "date"
    TIME = "time"
    TIMESTAMP = "timestamp"
    TIMESTAMPTZ = "timestamptz"
    INTERVAL = "interval"
    UUID = "uuid"
    BYTEA = "bytea"
    JSON = "json"
    JSONB = "jsonb"
    INET = "inet"
    CIDR = "cidr"

    def sqlalchemy_type(self) -> Any:
        """SQLAlchemy column type for this tag (used for DDL)."""
        return SQLALCHEMY_TYPES[self]()


class EnumStorageMode(str, Enum):
    """How an enum member is written: by position or by name."""
    ORDINAL = "ordinal"
    NAME = "name"


SQLALCHEMY_TYPES: Dict[DataType, Callable[[], Any]] = {
    DataType.BOOLEAN: lambda: Boolean(),
    DataType.CHAR: lambda: CHAR(1),
    DataType.SMALLINT: lambda: SmallInteger(),
    DataType.INTEGER: lambda: Integer(),
    DataType.BIGINT: lambda: BigInteger(),
    DataType.NUMERIC: lambda: Numeric(),
    DataType.REAL: lambda: REAL(),
    DataType.DOUBLE_PRECISION: lambda: DOUBLE_PRECISION(),
    DataType.TEXT: lambda: Text(),
    DataType.VARCHAR: lambda: String(),
    DataType.DATE: lambda: Date(),
    DataType.TIME: lambda: Time(),
    DataType.TIMESTAMP: lambda: TIMESTAMP(timezone=False),
    DataType.TIMESTAMPTZ: lambda: TIMESTAMP(timezone=True),
    DataType.INTERVAL: lambda: INTERVAL(),
    DataType.UUID: lambda: UUID(as_uuid=True),
    DataType.BYTEA: lambda: BYTEA(),
    DataType.JSON: lambda: JSON(),
    DataType.JSONB: lambda: JSONB(),
    DataType.INET: lambda: INET(),
    DataType.CIDR: lambda: CIDR(),
}

_identifier_preparer = postgresql.dialect().identifier_preparer


def quote_identifier(name: str) -> str:
    """Always-quoted PostgreSQL identifier, with embedded quotes escaped."""
    return _identifier_preparer.quote_identifier(name)


# ==============================================================================
# RESULT TYPES
# ==============================================================================

Extractor = Callable[[Any], Any]


@dataclass(frozen=True)
class TaggedValue:
    """One extracted cell tagged with its column's storage type."""
    data_type: DataType
    value: Any = None

    @property
    def is_null(self) -> bool:
        return self.value is None


@dataclass(frozen=True)
class ColumnDescriptor:
    """
    A single target column.

    The extractor returns the column value for a record, or None when the
    record has no value (written as NULL by the writer).
    """
    name: str
    data_type: DataType
    extractor: Extractor = field(compare=False, repr=False)

    def extract(self, record: Any) -> Any:
        return self.extractor(record)


@dataclass(frozen=True)
class Descriptor:
    """
    Finished, immutable column mapping for one record type.

    Shareable across writer threads; nothing here is mutated after build.
    """
    schema_name: str
    table_name: str
    use_quoting: bool
    columns: Tuple[ColumnDescriptor, ...]
    column_types: Mapping[str, DataType] = field(
        default_factory=lambda: MappingProxyType({}), compare=False, repr=False
    )

    def __len__(self) -> int:
        return len(self.columns)

    def __iter__(self) -> Iterator[ColumnDescriptor]:
        return iter(self.columns)

    @property
    def column_names(self) -> List[str]:
        return [column.name for column in self.columns]

    def get_column(self, name: str) -> Optional[ColumnDescriptor]:
        """Look up a column by name."""
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def _identifier(self, name: str) -> str:
        return quote_identifier(name) if self.use_quoting else name

    @property
    def full_table_name(self) -> str:
        """Schema-qualified table name, quoted when quoting is enabled."""
        if not self.schema_name:
            return self._identifier(self.table_name)
        return f"{self._identifier(self.schema_name)}.{self._identifier(self.table_name)}"

    def copy_statement(self) -> str:
        """
        Build the binary COPY command for this mapping.

        Returns:
            e.g. COPY "sample"."unit_test"("id", "status") FROM STDIN BINARY

        Raises:
            ConfigurationError: If the descriptor has no table name
        """
        if not self.table_name:
            raise ConfigurationError("Cannot build a COPY statement without a table name")

        column_list = ", ".join(self._identifier(name) for name in self.column_names)
        return f"COPY {self.full_table_name}({column_list}) FROM STDIN BINARY"

    def extract_row(self, record: Any) -> List[TaggedValue]:
        """Extract every column of a record as tagged values, in column order."""
        return [
            TaggedValue(column.data_type, column.extractor(record))
            for column in self.columns
        ]

    def to_table(self, metadata: Optional[MetaData] = None) -> Table:
        """
        Build a SQLAlchemy Table matching this descriptor.

        Args:
            metadata: Optional metadata object (creates new if not provided)

        Returns:
            SQLAlchemy Table with one column per ColumnDescriptor
        """
        if not self.table_name:
            raise ConfigurationError("Cannot build a table without a table name")

        columns = [
            Column(column.name, column.data_type.sqlalchemy_type(), quote=self.use_quoting or None)
            for column in self.columns
        ]
        return Table(
            self.table_name,
            metadata if metadata is not None else MetaData(),
            *columns,
            schema=self.schema_name or None,
            quote=self.use_quoting or None,
            quote_schema=self.use_quoting or None,
            extend_existing=True
        )
