"""
Tests for the mapping builder.

Covers the end-to-end scenarios: default inference, enum ordinal/name
storage, override precedence, skipped fields and extraction failures.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import List, Optional

import pytest

from modules.bulk_mapping import (
    ConfigurationError,
    DataType,
    EnumStorageMode,
    ExtractionInvocationError,
    MappingBuilder,
    MissingAccessorError,
    RecordDescription,
    UnresolvableTypeError,
    build_mapping,
    bulk_column,
    table,
)
from modules.bulk_mapping.records.dataclass_records import describe_dataclass
from modules.bulk_mapping.records.description import COLUMN_KEY, DATA_TYPE_KEY
from shared.utils.config import settings


class Status(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Label(Enum):
    A = 1
    B = 2


@table("unit_test", schema="sample")
@dataclass
class UnitTest:
    id: int = bulk_column()
    status: Optional[Status] = bulk_column(enum_mode=EnumStorageMode.ORDINAL, default=None)
    label: Optional[Label] = bulk_column(enum_mode=EnumStorageMode.NAME, default=None)


@dataclass
class Account:
    id: int = bulk_column()
    amount: float = bulk_column(default=0.0)
    balance: Decimal = bulk_column(data_type=DataType.NUMERIC, default=Decimal("0"))
    nickname: str = field(default="")


@dataclass
class Hidden:
    id: int = bulk_column()
    _secret: str = bulk_column("secret", default="x")


@dataclass
class WithGetters:
    _code: str = bulk_column("code", default="abc")
    _name: str = bulk_column("name", default="widget")

    def get_code(self):
        return self._code.upper()

    @property
    def name(self):
        return self._name.title()


@dataclass
class Exploding:
    _value: int = bulk_column("value", default=1)

    @property
    def value(self):
        raise RuntimeError("boom")


@dataclass
class Tagged:
    id: int = bulk_column()
    tags: List[str] = bulk_column(default_factory=list)


def test_scenario_defaults_and_enums():
    descriptor = build_mapping(UnitTest)
    record = UnitTest(id=42, status=Status.ACTIVE, label=Label.B)

    assert descriptor.schema_name == "sample"
    assert descriptor.table_name == "unit_test"
    assert descriptor.column_names == ["id", "status", "label"]
    assert [c.data_type for c in descriptor] == [DataType.INTEGER, DataType.SMALLINT, DataType.TEXT]
    assert [c.extract(record) for c in descriptor] == [42, 0, "B"]


def test_scenario_seed_override_for_ordinal_enum():
    descriptor = build_mapping(UnitTest, {"status": DataType.BIGINT})
    status = descriptor.get_column("status")

    assert status.data_type == DataType.BIGINT
    assert status.extract(UnitTest(id=1, status=Status.ACTIVE)) == 0
    assert status.extract(UnitTest(id=1, status=Status.INACTIVE)) == 1


def test_seed_override_by_member_name():
    descriptor = build_mapping(UnitTest, {"status": "BIGINT"})

    assert descriptor.get_column("status").data_type == DataType.BIGINT

    with pytest.raises(ConfigurationError, match="status"):
        build_mapping(UnitTest, {"status": "HUGEINT"})


def test_absent_enum_values_stay_absent():
    descriptor = build_mapping(UnitTest)
    record = UnitTest(id=7)

    assert descriptor.get_column("status").extract(record) is None
    assert descriptor.get_column("label").extract(record) is None


def test_name_enum_ignores_override():
    descriptor = build_mapping(UnitTest, {"label": DataType.INTEGER})

    assert descriptor.get_column("label").data_type == DataType.TEXT


def test_enum_without_declared_mode_is_stored_by_ordinal():
    @dataclass
    class Plain:
        status: Status = bulk_column(default=Status.ACTIVE)

    column = build_mapping(Plain).get_column("status")

    assert column.data_type == DataType.SMALLINT
    assert column.extract(Plain(status=Status.INACTIVE)) == 1


def test_wrong_enum_value_raises_extraction_error():
    descriptor = build_mapping(UnitTest)

    with pytest.raises(ExtractionInvocationError) as exc_info:
        descriptor.get_column("status").extract(UnitTest(id=1, status="active"))

    assert exc_info.value.column_name == "status"


def test_override_preempts_default_inference():
    descriptor = build_mapping(Account, {"amount": DataType.REAL})

    assert descriptor.get_column("amount").data_type == DataType.REAL
    assert descriptor.get_column("id").data_type == DataType.INTEGER


def test_unmarked_fields_are_not_mapped():
    descriptor = build_mapping(Account)

    assert "nickname" not in descriptor.column_names


def test_declared_field_type_wins_over_seed():
    @dataclass
    class Declared:
        total: int = bulk_column(data_type=DataType.BIGINT, default=0)

    descriptor = build_mapping(Declared, {"total": DataType.SMALLINT})

    assert descriptor.get_column("total").data_type == DataType.BIGINT


def test_unmapped_field_can_declare_type_for_another_column():
    @dataclass
    class Legacy:
        status: Status = bulk_column(default=Status.ACTIVE)
        status_type: int = field(default=0, metadata={COLUMN_KEY: "status", DATA_TYPE_KEY: DataType.INTEGER})

    descriptor = build_mapping(Legacy)

    assert descriptor.get_column("status").data_type == DataType.INTEGER
    assert "status_type" not in descriptor.column_names


def test_seed_overrides_are_not_modified():
    seed = {"amount": DataType.NUMERIC}

    descriptor = build_mapping(Account, seed)

    assert seed == {"amount": DataType.NUMERIC}
    assert "balance" in descriptor.column_types
    with pytest.raises(TypeError):
        descriptor.column_types["amount"] = DataType.TEXT


def test_field_without_accessor_is_skipped():
    descriptor = build_mapping(Hidden)

    assert descriptor.column_names == ["id"]


def test_strict_mode_raises_for_missing_accessor():
    with pytest.raises(MissingAccessorError) as exc_info:
        build_mapping(Hidden, strict=True)

    assert exc_info.value.field_name == "_secret"


def test_strict_mode_from_settings(monkeypatch):
    monkeypatch.setattr(settings, "BULK_MAPPING_STRICT", True)

    with pytest.raises(MissingAccessorError):
        MappingBuilder().build(Hidden)


def test_getter_and_property_accessors():
    descriptor = build_mapping(WithGetters)
    record = WithGetters()

    assert descriptor.column_names == ["code", "name"]
    assert descriptor.get_column("code").extract(record) == "ABC"
    assert descriptor.get_column("name").extract(record) == "Widget"


def test_accessor_failure_wraps_cause():
    column = build_mapping(Exploding).get_column("value")

    with pytest.raises(ExtractionInvocationError) as exc_info:
        column.extract(Exploding())

    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert exc_info.value.column_name == "value"


def test_unresolvable_type_names_field():
    with pytest.raises(UnresolvableTypeError) as exc_info:
        build_mapping(Tagged)

    assert exc_info.value.field_name == "tags"
    assert "tags" in str(exc_info.value)


def test_override_makes_unsupported_type_resolvable():
    descriptor = build_mapping(Tagged, {"tags": DataType.JSONB})

    assert descriptor.get_column("tags").data_type == DataType.JSONB
    assert descriptor.get_column("tags").extract(Tagged(id=1, tags=["x"])) == ["x"]


def test_build_is_idempotent():
    builder = MappingBuilder()
    first = builder.build(UnitTest, {"status": DataType.INTEGER})
    second = builder.build(UnitTest, {"status": DataType.INTEGER})
    record = UnitTest(id=3, status=Status.INACTIVE, label=Label.A)

    assert first == second
    assert first.extract_row(record) == second.extract_row(record)


def test_invalid_record_types_raise_configuration_error():
    for record_type in (None, int, object()):
        with pytest.raises(ConfigurationError):
            build_mapping(record_type)


def test_builder_api_description():
    class Row:
        def __init__(self, key, state):
            self.key = key
            self.state = state

    description = (
        RecordDescription.builder(Row, table="rows")
        .field("key", int, column="row_key", accessor=lambda r: r.key)
        .field("state", Optional[Status], enum_mode=EnumStorageMode.NAME, accessor=lambda r: r.state)
        .field("ignored", str, mapped=False)
        .build()
    )

    descriptor = build_mapping(description)

    assert descriptor.column_names == ["row_key", "state"]
    assert descriptor.extract_row(Row(5, None))[1].is_null
    assert [v.value for v in descriptor.extract_row(Row(5, Status.ACTIVE))] == [5, "ACTIVE"]


def test_overrides_file_from_settings(monkeypatch, tmp_path):
    overrides_file = tmp_path / "overrides.yaml"
    overrides_file.write_text("columns:\n  amount: numeric\n  id: bigint\n")
    monkeypatch.setattr(settings, "BULK_MAPPING_OVERRIDES_FILE", str(overrides_file))

    descriptor = build_mapping(Account, {"id": DataType.SMALLINT})

    assert descriptor.get_column("amount").data_type == DataType.NUMERIC
    # Caller seed is layered over the file
    assert descriptor.get_column("id").data_type == DataType.SMALLINT


def test_local_types_in_string_annotations():
    class Mood(Enum):
        CALM = 1
        ANGRY = 2

    @table("moods")
    @dataclass
    class Reading:
        id: int = bulk_column()
        mood: "Mood" = bulk_column(enum_mode=EnumStorageMode.NAME, default=None)

    with pytest.raises(ConfigurationError, match="localns"):
        build_mapping(Reading)

    descriptor = build_mapping(describe_dataclass(Reading, localns={"Mood": Mood}))

    assert [c.data_type for c in descriptor] == [DataType.INTEGER, DataType.TEXT]
    assert descriptor.get_column("mood").extract(Reading(id=1, mood=Mood.ANGRY)) == "ANGRY"
