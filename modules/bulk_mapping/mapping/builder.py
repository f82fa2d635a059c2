"""
Mapping builder.

Turns a record type into a Descriptor: one ColumnDescriptor per mapped
field, each with a resolved data type and an extractor reading the value
from a record. Build once per record type and reuse the result.
"""

from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional

from modules.bulk_mapping.core.exceptions import (
    ExtractionInvocationError,
    MissingAccessorError,
    UnresolvableTypeError,
)
from modules.bulk_mapping.core.types import ColumnDescriptor, DataType, Descriptor, Extractor
from modules.bulk_mapping.mapping.accessors import AccessorResolver
from modules.bulk_mapping.mapping.enum_strategy import DEFAULT_ENUM_MODE, EnumFieldStrategy
from modules.bulk_mapping.mapping.overrides import OverrideCollector, load_overrides
from modules.bulk_mapping.mapping.type_resolver import TypeResolver
from modules.bulk_mapping.records import describe_record
from modules.bulk_mapping.records.description import Accessor, FieldDescription, RecordDescription
from shared.utils.config import settings
from shared.utils.logger import log_error, setup_logger

logger = setup_logger(__name__)


def _invoker(column_name: str, accessor: Accessor) -> Callable[[Any], Any]:
    """Wrap an accessor so any failure surfaces as ExtractionInvocationError."""

    def read(record: Any) -> Any:
        try:
            return accessor(record)
        except Exception as e:
            raise ExtractionInvocationError(column_name, e) from e

    return read


class MappingBuilder:
    """
    Builds Descriptors from record types.

    Per mapped field:
    1. Find its accessor (skip the field if there is none, or raise in strict mode)
    2. Enum fields: ordinal or name, see EnumFieldStrategy
    3. Other fields: override table entry, else the default for the native type
    4. Append the column, keeping field declaration order

    The builder keeps no state between builds; it can be shared.

    Example:
        >>> descriptor = MappingBuilder().build(UnitTest, {"status": DataType.BIGINT})
        >>> descriptor.copy_statement()
        'COPY "sample"."unit_test"("id", "status", "label") FROM STDIN BINARY'
    """

    def __init__(
        self,
        type_resolver: Optional[TypeResolver] = None,
        override_collector: Optional[OverrideCollector] = None,
        accessor_resolver: Optional[AccessorResolver] = None,
        enum_strategy: Optional[EnumFieldStrategy] = None,
        strict: Optional[bool] = None,
        use_quoting: Optional[bool] = None
    ):
        """
        Args:
            type_resolver: Default type inference (replace to change defaults)
            override_collector: Merges field-declared types into overrides
            accessor_resolver: Finds field accessors
            enum_strategy: Maps enum fields
            strict: Raise MissingAccessorError instead of skipping fields
                (defaults to BULK_MAPPING_STRICT)
            use_quoting: Quote identifiers (defaults to BULK_MAPPING_USE_QUOTING)
        """
        self.type_resolver = type_resolver or TypeResolver()
        self.override_collector = override_collector or OverrideCollector()
        self.accessor_resolver = accessor_resolver or AccessorResolver()
        self.enum_strategy = enum_strategy or EnumFieldStrategy()
        self.strict = settings.BULK_MAPPING_STRICT if strict is None else strict
        self.use_quoting = settings.BULK_MAPPING_USE_QUOTING if use_quoting is None else use_quoting

    def build(
        self,
        record_type: Any,
        seed_overrides: Optional[Mapping[str, DataType]] = None,
        *,
        strict: Optional[bool] = None,
        use_quoting: Optional[bool] = None
    ) -> Descriptor:
        """
        Build the Descriptor for a record type.

        Args:
            record_type: RecordDescription, dataclass or SQLAlchemy model
            seed_overrides: Column name -> data type; copied, never modified
            strict: Per-call override of the builder's strict flag
            use_quoting: Per-call override of the builder's quoting flag

        Returns:
            Immutable Descriptor

        Raises:
            ConfigurationError: If the record type is missing or invalid
            UnresolvableTypeError: If a mapped field's type cannot be resolved
            MissingAccessorError: In strict mode, if a mapped field has no accessor
        """
        description = describe_record(record_type)
        strict = self.strict if strict is None else strict
        use_quoting = self.use_quoting if use_quoting is None else use_quoting

        logger.info(f"Building column mapping for {description.name}")

        overrides = self.override_collector.collect(description, self._seed(seed_overrides))
        accessors = description.accessors

        columns: List[ColumnDescriptor] = []
        seen = set()
        for field in description.mapped_fields:
            accessor = self.accessor_resolver.find(accessors, field.name)
            if accessor is None:
                if strict:
                    raise MissingAccessorError(field.name)
                logger.warning(
                    f"No accessor for mapped field '{description.name}.{field.name}', "
                    f"column '{field.column}' skipped"
                )
                continue

            column = self._map_field(description, field, accessor, overrides)

            if column.name in seen:
                logger.warning(f"Duplicate column '{column.name}' in mapping for {description.name}")
            seen.add(column.name)

            logger.debug(
                f"Mapped {description.name}.{field.name} -> "
                f"'{column.name}' ({column.data_type.value}) via {accessor.name}"
            )
            columns.append(column)

        descriptor = Descriptor(
            schema_name=description.schema_name,
            table_name=description.table_name,
            use_quoting=use_quoting,
            columns=tuple(columns),
            column_types=MappingProxyType(dict(overrides)),
        )
        logger.info(f"Built mapping for {description.name} with {len(columns)} columns")
        return descriptor

    def _seed(self, seed_overrides: Optional[Mapping[str, DataType]]) -> Dict[str, DataType]:
        """Configured overrides file first, caller seed on top."""
        seed: Dict[str, DataType] = {}
        if settings.has_overrides_file:
            seed.update(load_overrides(settings.BULK_MAPPING_OVERRIDES_FILE))
        if seed_overrides:
            seed.update(seed_overrides)
        return seed

    def _map_field(
        self,
        description: RecordDescription,
        field: FieldDescription,
        accessor: Accessor,
        overrides: Mapping[str, DataType]
    ) -> ColumnDescriptor:
        column_name = field.column
        read = _invoker(column_name, accessor)

        if field.is_enum:
            data_type, extractor = self.enum_strategy.map_enum(
                column_name,
                field.value_type,
                field.enum_mode or DEFAULT_ENUM_MODE,
                overrides,
                read,
            )
            return ColumnDescriptor(column_name, data_type, extractor)

        if field.enum_mode is not None:
            logger.warning(
                f"Enum storage mode on non-enum field '{description.name}.{field.name}' ignored"
            )

        data_type = overrides.get(column_name) or self.type_resolver.try_resolve(field.native_type)
        if data_type is None:
            error = UnresolvableTypeError(field.name, field.native_type)
            log_error(logger, error, context=f"Mapping {description.name}")
            raise error

        extractor: Extractor = read
        return ColumnDescriptor(column_name, DataType(data_type), extractor)


def build_mapping(
    record_type: Any,
    overrides: Optional[Mapping[str, DataType]] = None,
    **kwargs: Any
) -> Descriptor:
    """
    Build a Descriptor with a default MappingBuilder.

    Args:
        record_type: RecordDescription, dataclass or SQLAlchemy model
        overrides: Optional seed override table
        **kwargs: strict / use_quoting
    """
    return MappingBuilder().build(record_type, overrides, **kwargs)
