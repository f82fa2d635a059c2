"""
Identifier value converters.
"""

from uuid import UUID

from modules.bulk_mapping.core.interfaces import IValueConverter
from modules.bulk_mapping.core.registry import register_converter
from modules.bulk_mapping.core.types import DataType


@register_converter(DataType.UUID)
class UuidConverter(IValueConverter):
    """UUID -> 16 raw bytes, network order."""

    def convert(self, value: UUID) -> bytes:
        return value.bytes
