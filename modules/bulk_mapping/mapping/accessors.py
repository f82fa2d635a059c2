"""
Accessor lookup for mapped fields.
"""

from typing import Iterable, Optional

from modules.bulk_mapping.records.description import Accessor
from modules.bulk_mapping.records.introspection import GETTER_PREFIXES


class AccessorResolver:
    """
    Finds the accessor that reads a field.

    An accessor matches when its name ends with the field name, ignoring
    case and the field's leading underscores. When several match, the exact
    name wins, then a get/is getter (get_status, getStatus, is_active), then
    the first remaining match in accessor order.
    """

    def find(self, accessors: Iterable[Accessor], field_name: str) -> Optional[Accessor]:
        target = field_name.lstrip("_").lower()
        if not target:
            return None

        getter_names = set()
        for prefix in GETTER_PREFIXES:
            getter_names.add(prefix + target)
            getter_names.add(f"{prefix}_{target}")

        exact = getter = suffix = None
        for accessor in accessors:
            name = accessor.name.lower()
            if not name.endswith(target):
                continue
            if name == target:
                exact = exact or accessor
            elif name in getter_names:
                getter = getter or accessor
            else:
                suffix = suffix or accessor

        return exact or getter or suffix
