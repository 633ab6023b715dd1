from collections.abc import Mapping
from copy import deepcopy
from typing import Any, Self


class AttributeBag:
    """ A free-form mapping of attributes, optionally grouped one level deep.

    Example of stored shape:

        {
          "intercom": {
            "id": "23"
          },
          "plan": "pro"
        }

    Reading a key or group that doesn't exist returns None. It never raises.
    """

    def __init__(self, attributes: Mapping[str, Any] | None = None) -> None:
        self._attributes: dict[str, Any] = dict(attributes) if attributes else {}

    def get(self, key: str) -> Any:
        return self._attributes.get(key)

    def set(self, key: str, value: Any) -> Self:
        self._attributes[key] = value
        return self

    def get_in_group(self, group: str, key: str) -> Any:
        """ Get attribute by group and key. Returns None if either doesn't exist. """
        group_attributes = self._attributes.get(group)
        if not isinstance(group_attributes, Mapping):
            return None
        return group_attributes.get(key)

    def set_in_group(self, group: str, key: str, value: Any) -> Self:
        group_attributes = self._attributes.setdefault(group, {})
        if not isinstance(group_attributes, dict):
            raise TypeError(f"Attribute '{group}' holds a {type(group_attributes).__name__}, not a group.")
        group_attributes[key] = value
        return self

    def all(self) -> dict[str, Any]:
        return deepcopy(self._attributes)

    def replace(self, attributes: Mapping[str, Any]) -> Self:
        self._attributes = dict(attributes)
        return self

    def __contains__(self, key: object) -> bool:
        return key in self._attributes

    def __len__(self) -> int:
        return len(self._attributes)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AttributeBag):
            return self._attributes == other._attributes
        return NotImplemented

    def __repr__(self) -> str:
        return f"AttributeBag({self._attributes!r})"

    # Bson
    def to_bson(self) -> dict[str, Any]:
        return deepcopy(self._attributes)

    @classmethod
    def from_bson(cls, bson: Any) -> 'AttributeBag':
        if bson is None:
            return cls()
        if not isinstance(bson, Mapping):
            raise ValueError(f"Expected a mapping for AttributeBag. Instead received {type(bson).__name__}")
        return cls(bson)
