"""
Registry pattern implementation for value converters.

Converters self-register with the registry, keyed by the data type they
produce wire values for. Bulk writers look them up per column.
"""

from typing import Callable, Dict, List

from modules.bulk_mapping.core.exceptions import ConverterNotFoundException
from modules.bulk_mapping.core.interfaces import IValueConverter
from modules.bulk_mapping.core.types import DataType
from shared.utils.logger import setup_logger

logger = setup_logger(__name__)


class ConverterRegistry:
    """
    Registry for value converters.

    Converters self-register using @register_converter decorator.
    """

    _REGISTRY: Dict[DataType, Callable[[], IValueConverter]] = {}

    @classmethod
    def register(
        cls,
        data_type: DataType,
        factory_func: Callable[[], IValueConverter]
    ) -> None:
        """
        Register a converter factory function.

        Args:
            data_type: Storage type the converter produces wire values for
            factory_func: Zero-argument function returning an IValueConverter
        """
        if data_type in cls._REGISTRY:
            logger.warning(f"Converter for '{data_type.value}' already registered, overwriting")

        cls._REGISTRY[data_type] = factory_func
        logger.debug(f"Registered converter: {data_type.value}")

    @classmethod
    def get(cls, data_type: DataType) -> IValueConverter:
        """
        Get converter instance from registry.

        Raises:
            ConverterNotFoundException: If no converter is registered
        """
        factory_func = cls._REGISTRY.get(data_type)

        if not factory_func:
            available = [registered.value for registered in cls._REGISTRY]
            raise ConverterNotFoundException(
                f"Converter for '{data_type.value}' not registered. "
                f"Available: {available}. "
                f"Make sure the converter module has been imported."
            )

        return factory_func()

    @classmethod
    def list_converters(cls) -> List[DataType]:
        """Get list of data types with a registered converter"""
        return list(cls._REGISTRY.keys())

    @classmethod
    def is_registered(cls, data_type: DataType) -> bool:
        """Check if a converter is registered for a data type"""
        return data_type in cls._REGISTRY


def register_converter(*data_types: DataType):
    """
    Decorator to register a converter for one or more data types.

    Usage:
        @register_converter(DataType.DATE)
        class DateConverter(IValueConverter):
            def convert(self, value):
                # Implementation
    """
    def decorator(cls):
        for data_type in data_types:
            ConverterRegistry.register(data_type, cls)
        return cls
    return decorator
