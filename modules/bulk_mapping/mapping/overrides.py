"""
Column data type overrides.

Overrides map a column name to a data type and win over default inference.
They come from three places, lowest precedence first: an optional YAML
file, the caller's seed table, and field-level declared types.
"""

from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from modules.bulk_mapping.core.exceptions import ConfigurationError
from modules.bulk_mapping.core.types import DataType
from modules.bulk_mapping.records.description import RecordDescription
from shared.utils.logger import setup_logger

logger = setup_logger(__name__)


def normalize_data_type(column: str, data_type: Any) -> DataType:
    """
    Coerce an override value to a DataType.

    Accepts a DataType, its value ("bigint") or its member name ("BIGINT").

    Raises:
        ConfigurationError: If the value names no data type
    """
    if isinstance(data_type, DataType):
        return data_type
    if isinstance(data_type, str):
        try:
            return DataType(data_type)
        except ValueError:
            member = DataType.__members__.get(data_type.upper())
            if member is not None:
                return member
    raise ConfigurationError(f"Invalid data type {data_type!r} for column '{column}'")


class OverrideConfig(BaseModel):
    """Schema of an overrides YAML file."""

    model_config = ConfigDict(extra="forbid")

    columns: Dict[str, DataType] = Field(default_factory=dict)

    @field_validator("columns", mode="before")
    @classmethod
    def _accept_member_names(cls, value: Any) -> Any:
        # Accept both "bigint" and "BIGINT"
        if not isinstance(value, dict):
            return value
        return {
            column: DataType[data_type.upper()]
            if isinstance(data_type, str) and data_type.upper() in DataType.__members__
            else data_type
            for column, data_type in value.items()
        }


def load_overrides(config_path: Union[str, Path]) -> Dict[str, DataType]:
    """
    Load a column override table from YAML.

    Expected format:
        columns:
          status: bigint
          created_at: timestamptz

    Raises:
        ConfigurationError: If the file is missing or invalid
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigurationError(f"Overrides file not found: {config_path}")

    try:
        with open(config_path, 'r') as f:
            raw = yaml.safe_load(f) or {}
        config = OverrideConfig.model_validate(raw)
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse overrides file {config_path}: {e}")
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e
    except ValidationError as e:
        raise ConfigurationError(f"Invalid overrides in {config_path}: {e}") from e

    logger.info(f"Loaded {len(config.columns)} column overrides from: {config_path}")
    return dict(config.columns)


class OverrideCollector:
    """
    Merges field-level declared types into an override table.

    Every field of the description is scanned in declaration order, mapped
    or not. A later declaration for the same column replaces an earlier one,
    and declarations replace seeded entries. The seed itself is never
    modified.
    """

    def collect(
        self,
        description: RecordDescription,
        seed: Optional[Mapping[str, DataType]] = None
    ) -> Dict[str, DataType]:
        overrides: Dict[str, DataType] = {
            column: normalize_data_type(column, data_type)
            for column, data_type in (seed or {}).items()
        }

        for field in description.fields:
            if field.declared_type is None:
                continue

            previous = overrides.get(field.column)
            if previous is not None and previous != field.declared_type:
                logger.debug(
                    f"Field '{field.name}' replaces override for column '{field.column}': "
                    f"{previous.value} -> {field.declared_type.value}"
                )
            overrides[field.column] = field.declared_type

        return overrides
