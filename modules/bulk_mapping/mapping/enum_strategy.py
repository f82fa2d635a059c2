"""
Enum field mapping.

Enum members are written either by zero-based declaration position
(ORDINAL) or by member name (NAME). None stays None in both modes.
"""

from enum import Enum
from typing import Any, Callable, Mapping, Tuple, Type

from modules.bulk_mapping.core.exceptions import ExtractionInvocationError
from modules.bulk_mapping.core.types import DataType, EnumStorageMode, Extractor
from shared.utils.logger import setup_logger

logger = setup_logger(__name__)

# Used for ORDINAL columns without an override
DEFAULT_ORDINAL_TYPE = DataType.SMALLINT

# Enum fields without a declared mode
DEFAULT_ENUM_MODE = EnumStorageMode.ORDINAL


class EnumFieldStrategy:
    """Builds the data type and extractor of an enum-typed column."""

    def map_enum(
        self,
        column_name: str,
        enum_class: Type[Enum],
        mode: EnumStorageMode,
        overrides: Mapping[str, DataType],
        read: Callable[[Any], Any]
    ) -> Tuple[DataType, Extractor]:
        """
        Args:
            column_name: Target column
            enum_class: The field's Enum type
            mode: ORDINAL or NAME
            overrides: Merged override table
            read: Reads the raw member from a record

        Returns:
            (data type, extractor)
        """
        if mode == EnumStorageMode.NAME:
            if column_name in overrides:
                logger.debug(f"Ignoring override for NAME enum column '{column_name}'")
            return DataType.TEXT, self._name_extractor(column_name, enum_class, read)

        data_type = overrides.get(column_name, DEFAULT_ORDINAL_TYPE)
        return data_type, self._ordinal_extractor(column_name, enum_class, read)

    @staticmethod
    def _member(column_name: str, enum_class: Type[Enum], value: Any) -> Enum:
        if not isinstance(value, enum_class):
            raise ExtractionInvocationError(
                column_name,
                TypeError(f"expected a {enum_class.__name__} member, got {type(value).__name__}")
            )
        return value

    def _ordinal_extractor(
        self,
        column_name: str,
        enum_class: Type[Enum],
        read: Callable[[Any], Any]
    ) -> Extractor:
        ordinals = {member: position for position, member in enumerate(enum_class)}

        def extract(record: Any) -> Any:
            value = read(record)
            if value is None:
                return None
            member = self._member(column_name, enum_class, value)
            if member not in ordinals:
                # Composite Flag values have no declaration position
                raise ExtractionInvocationError(
                    column_name, ValueError(f"{member!r} has no ordinal in {enum_class.__name__}")
                )
            return ordinals[member]

        return extract

    def _name_extractor(
        self,
        column_name: str,
        enum_class: Type[Enum],
        read: Callable[[Any], Any]
    ) -> Extractor:

        def extract(record: Any) -> Any:
            value = read(record)
            if value is None:
                return None
            return self._member(column_name, enum_class, value).name

        return extract
