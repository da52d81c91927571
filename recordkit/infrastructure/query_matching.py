"""Query Matching - partial-mapping predicate shared by the reference storages.

Invariants:
    - None or an empty mapping matches every row
    - Any other non-mapping query is rejected with TypeError
    - Every query key must be present in the row with an equal value
    - Nested mappings match as subsets, recursively
"""

from collections.abc import Mapping
from typing import Any


def matches_query(fields: Mapping[str, Any], query: Mapping[str, Any] | None) -> bool:
    if not query:
        return True
    if not isinstance(query, Mapping):
        raise TypeError(f"Query must be a mapping, got {type(query).__name__}")
    for key, expected in query.items():
        if key not in fields:
            return False
        actual = fields[key]
        if isinstance(expected, Mapping):
            if not isinstance(actual, Mapping) or not matches_query(actual, expected):
                return False
        elif actual != expected:
            return False
    return True
