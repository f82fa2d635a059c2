"""
Core interfaces for the bulk mapping module.
"""

from abc import ABC, abstractmethod
from typing import Any


# ==============================================================================
# VALUE CONVERTER INTERFACE
# ==============================================================================

class IValueConverter(ABC):
    """
    Abstract interface for value converters.

    A converter turns a non-null domain value into the primitive a bulk
    writer encodes on the wire. Converters are total over their domain and
    perform no I/O. The writer applies them; the mapping builder never does.

    Example:
        @register_converter(DataType.TIME)
        class TimeConverter(IValueConverter):
            def convert(self, value):
                return value.hour * 3_600_000_000 + ...
    """

    @abstractmethod
    def convert(self, value: Any) -> Any:
        """
        Convert a domain value to its wire-native primitive.

        Args:
            value: Non-null domain value

        Returns:
            Wire-native value (int, bytes, tuple, ...)
        """
        pass
