"""Record - schema-less field bag with one reserved identity field.

Invariants:
    - Fields live in an explicit dict, never as dynamic attributes
    - set() merges: incoming values win, values are stored by reference
    - set(None) and set({}) are no-ops
    - snapshot() is a shallow copy that adds and drops nothing
    - is_new is True iff the id field is unset or falsy
"""

from collections.abc import Iterator, Mapping
from typing import Any

from recordkit.core.domain_types import ID_FIELD, Fields


class Record:
    """Mutable mapping of field name -> value. No types are enforced."""

    def __init__(self, data: Mapping[str, Any] | None = None):
        self._fields: Fields = {}
        self.set(data)

    def set(self, key: str | Mapping[str, Any] | None, value: Any = None) -> None:
        """Set one field, or merge every pair of a mapping."""
        if not key:
            return
        if isinstance(key, Mapping):
            for name, item in key.items():
                self.set(name, item)
            return
        self._fields[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        return self._fields.get(key, default)

    def snapshot(self) -> Fields:
        """Plain shallow copy of every field, for outer serialization layers."""
        return dict(self._fields)

    to_json = snapshot

    @property
    def id(self) -> Any:
        return self._fields.get(ID_FIELD)

    @property
    def is_new(self) -> bool:
        return not self._fields.get(ID_FIELD)

    def __getitem__(self, key: str) -> Any:
        return self._fields[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __contains__(self, key: object) -> bool:
        return key in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Record):
            return self._fields == other._fields
        if isinstance(other, Mapping):
            return self._fields == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._fields!r})"
