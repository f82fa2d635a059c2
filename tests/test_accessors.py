"""
Tests for accessor collection and lookup.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest

from modules.bulk_mapping.mapping.accessors import AccessorResolver
from modules.bulk_mapping.records.description import Accessor
from modules.bulk_mapping.records.introspection import collect_accessors, is_getter_name


def _accessors(*names):
    return [Accessor(name, lambda record: record) for name in names]


class Customer:
    def __init__(self):
        self.email = "a@example.com"
        self._active = True

    def getEmail(self):
        return self.email.upper()

    def is_active(self):
        return self._active

    def get_discount(self, rate):
        return rate

    def _get_hidden(self):
        return "hidden"

    @property
    def display_name(self):
        return "Customer"


def test_exact_name_wins():
    found = AccessorResolver().find(_accessors("get_id", "order_id", "id"), "id")

    assert found.name == "id"


def test_getter_preferred_over_other_suffix_match():
    found = AccessorResolver().find(_accessors("parent_status", "getStatus"), "status")

    assert found.name == "getStatus"


def test_suffix_match_is_case_insensitive():
    found = AccessorResolver().find(_accessors("currentSTATUS"), "status")

    assert found.name == "currentSTATUS"


def test_private_field_name_is_matched_without_underscores():
    found = AccessorResolver().find(_accessors("get_secret"), "_secret")

    assert found.name == "get_secret"


def test_no_match_returns_none():
    assert AccessorResolver().find(_accessors("get_name"), "status") is None
    assert AccessorResolver().find([], "status") is None


def test_collect_accessors_from_class():
    names = [a.name for a in collect_accessors(Customer, ["email", "_active"])]

    assert names == ["email", "getEmail", "is_active", "display_name"]


def test_collected_accessors_read_records():
    accessors = {a.name: a for a in collect_accessors(Customer, ["email"])}
    customer = Customer()

    assert accessors["email"](customer) == "a@example.com"
    assert accessors["getEmail"](customer) == "A@EXAMPLE.COM"
    assert accessors["is_active"](customer) is True
    assert accessors["display_name"](customer) == "Customer"


class Shipment:
    def issue_date(self):
        return "2024-01-01"

    def island(self):
        return "Crete"

    def getaway(self):
        return "car"

    def get_date(self):
        return "2024-01-02"

    def getCarrier(self):
        return "DHL"

    def isLate(self):
        return False


def test_getter_prefix_needs_word_boundary():
    names = [a.name for a in collect_accessors(Shipment)]

    assert names == ["get_date", "getCarrier", "isLate"]


@pytest.mark.parametrize("name,expected", [
    ("get_date", True),
    ("getDate", True),
    ("is_active", True),
    ("isActive", True),
    ("issue_date", False),
    ("island", False),
    ("getaway", False),
    ("get", False),
    ("is", False),
])
def test_is_getter_name(name, expected):
    assert is_getter_name(name) is expected
