"""
Column mapping for bulk writers.
"""

from modules.bulk_mapping.mapping.accessors import AccessorResolver
from modules.bulk_mapping.mapping.builder import MappingBuilder, build_mapping
from modules.bulk_mapping.mapping.enum_strategy import EnumFieldStrategy
from modules.bulk_mapping.mapping.overrides import OverrideCollector, OverrideConfig, load_overrides
from modules.bulk_mapping.mapping.type_resolver import TypeResolver, DEFAULT_TYPE_MAPPING

__all__ = [
    "AccessorResolver",
    "EnumFieldStrategy",
    "MappingBuilder",
    "OverrideCollector",
    "OverrideConfig",
    "TypeResolver",
    "DEFAULT_TYPE_MAPPING",
    "build_mapping",
    "load_overrides",
]
