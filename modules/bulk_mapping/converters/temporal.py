"""
Temporal value converters.

PostgreSQL's binary format counts dates and timestamps from 2000-01-01.
Self-registers with ConverterRegistry.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Tuple

from modules.bulk_mapping.core.interfaces import IValueConverter
from modules.bulk_mapping.core.registry import register_converter
from modules.bulk_mapping.core.types import DataType

POSTGRES_EPOCH_DATE = date(2000, 1, 1)
POSTGRES_EPOCH = datetime(2000, 1, 1)
POSTGRES_EPOCH_UTC = datetime(2000, 1, 1, tzinfo=timezone.utc)

MICROS_PER_SECOND = 1_000_000
MICROS_PER_DAY = 86_400 * MICROS_PER_SECOND


def _delta_to_micros(delta: timedelta) -> int:
    return delta.days * MICROS_PER_DAY + delta.seconds * MICROS_PER_SECOND + delta.microseconds


@register_converter(DataType.TIME)
class TimeConverter(IValueConverter):
    """time of day -> microseconds since midnight."""

    def convert(self, value: time) -> int:
        seconds = value.hour * 3600 + value.minute * 60 + value.second
        return seconds * MICROS_PER_SECOND + value.microsecond


@register_converter(DataType.DATE)
class DateConverter(IValueConverter):
    """date -> days since 2000-01-01."""

    def convert(self, value: date) -> int:
        if isinstance(value, datetime):
            value = value.date()
        return (value - POSTGRES_EPOCH_DATE).days


@register_converter(DataType.TIMESTAMP)
class TimestampConverter(IValueConverter):
    """
    datetime -> microseconds since 2000-01-01.

    TIMESTAMP stores wall-clock time, so any tzinfo is dropped, not applied.
    """

    def convert(self, value: datetime) -> int:
        return _delta_to_micros(value.replace(tzinfo=None) - POSTGRES_EPOCH)


@register_converter(DataType.TIMESTAMPTZ)
class TimestampTzConverter(IValueConverter):
    """Aware datetime -> UTC microseconds since 2000-01-01. Naive values are taken as UTC."""

    def convert(self, value: datetime) -> int:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return _delta_to_micros(value - POSTGRES_EPOCH_UTC)


@register_converter(DataType.INTERVAL)
class IntervalConverter(IValueConverter):
    """timedelta -> (microseconds, days, months)."""

    def convert(self, value: timedelta) -> Tuple[int, int, int]:
        micros = value.seconds * MICROS_PER_SECOND + value.microseconds
        return micros, value.days, 0
