"""
Class introspection shared by the record front ends.

Collects the public zero-argument accessors of a class and reads table
metadata. This is the only place reflection over user classes happens;
the result is frozen into a RecordDescription.
"""

import inspect
from operator import attrgetter
from typing import Any, Dict, Iterable, List, Tuple

from modules.bulk_mapping.records.description import Accessor

GETTER_PREFIXES = ("get", "is")

TABLE_ATTRIBUTE = "__bulk_table__"


def is_getter_name(name: str) -> bool:
    """True for get_x / getX / is_x / isX, not for getaway or island."""
    for prefix in GETTER_PREFIXES:
        if name.lower().startswith(prefix) and len(name) > len(prefix):
            following = name[len(prefix)]
            if following == "_" or following.isupper():
                return True
    return False


def _method_reader(name: str):
    def read(record: Any) -> Any:
        return getattr(record, name)()
    return read


def _is_zero_argument(function: Any) -> bool:
    try:
        parameters = list(inspect.signature(function).parameters.values())
    except (TypeError, ValueError):
        return False
    # Only `self` may remain
    return len(parameters) == 1 and parameters[0].kind in (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
    )


def _class_members(cls: type) -> Dict[str, Any]:
    """Class attributes in definition order, subclasses overriding bases."""
    members: Dict[str, Any] = {}
    for klass in reversed(cls.__mro__[:-1]):
        members.update(vars(klass))
    return members


def collect_accessors(cls: type, attribute_names: Iterable[str] = ()) -> Tuple[Accessor, ...]:
    """
    Collect every externally visible zero-argument accessor of a class.

    Args:
        cls: Record class
        attribute_names: Plain attributes (dataclass fields, ORM columns)
            readable directly; public ones become accessors too

    Returns:
        Accessors in order: plain attributes first, then properties and
        get/is methods in definition order
    """
    accessors: List[Accessor] = []
    seen = set()

    for name in attribute_names:
        if name.startswith("_") or name in seen:
            continue
        accessors.append(Accessor(name, attrgetter(name)))
        seen.add(name)

    for name, member in _class_members(cls).items():
        if name.startswith("_") or name in seen:
            continue

        if isinstance(member, property):
            accessors.append(Accessor(name, attrgetter(name)))
            seen.add(name)
        elif inspect.isfunction(member) and is_getter_name(name):
            if _is_zero_argument(member):
                accessors.append(Accessor(name, _method_reader(name)))
                seen.add(name)

    return tuple(accessors)


def table(name: str, schema: str = ""):
    """
    Decorator declaring the target table of a record class.

    Usage:
        @table("unit_test", schema="sample")
        @dataclass
        class UnitTest:
            ...
    """
    def decorator(cls):
        setattr(cls, TABLE_ATTRIBUTE, (schema, name))
        return cls
    return decorator


def get_table_name(cls: type) -> str:
    declared = getattr(cls, TABLE_ATTRIBUTE, None)
    if declared is not None:
        return declared[1]
    return getattr(cls, "__tablename__", "") or ""


def get_schema_name(cls: type) -> str:
    declared = getattr(cls, TABLE_ATTRIBUTE, None)
    if declared is not None:
        return declared[0]
    table_args = getattr(cls, "__table_args__", None)
    if isinstance(table_args, dict):
        return table_args.get("schema") or ""
    if isinstance(table_args, tuple) and table_args and isinstance(table_args[-1], dict):
        return table_args[-1].get("schema") or ""
    return ""
