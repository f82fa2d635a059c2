"""
Value converters for bulk writers.

Converters turn domain values into wire-native primitives.
"""

# Import all converters to trigger self-registration
from modules.bulk_mapping.converters.temporal import (
    TimeConverter,
    DateConverter,
    TimestampConverter,
    TimestampTzConverter,
    IntervalConverter,
)
from modules.bulk_mapping.converters.identifiers import UuidConverter

__all__ = [
    "TimeConverter",
    "DateConverter",
    "TimestampConverter",
    "TimestampTzConverter",
    "IntervalConverter",
    "UuidConverter",
]
