from collections.abc import Iterable
from typing import Any, Iterator, Self


class TagList:
    """ An ordered list of unique string tags.
    Adding a tag twice and removing a missing tag are both no-ops. Removal can shift later tags; position carries no meaning. """

    def __init__(self, tags: Iterable[str] | None = None) -> None:
        self._tags: list[str] = []
        if tags:
            self.set_tags(tags)

    def set_tags(self, tags: Iterable[str]) -> Self:
        self._tags = []
        for tag in tags:
            self.add(tag)
        return self

    def add(self, tag: str) -> Self:
        if not isinstance(tag, str):
            raise TypeError(f"Tags must be strings. Got {type(tag).__name__}.")
        if tag not in self._tags:
            self._tags.append(tag)
        return self

    def remove(self, tag: str) -> Self:
        if tag in self._tags:
            self._tags.remove(tag)
        return self

    def __iter__(self) -> Iterator[str]:
        return iter(self._tags)

    def __len__(self) -> int:
        return len(self._tags)

    def __contains__(self, tag: object) -> bool:
        return tag in self._tags

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TagList):
            return self._tags == other._tags
        if isinstance(other, list):
            return self._tags == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"TagList({self._tags!r})"

    # Bson
    def to_bson(self) -> list[str]:
        return list(self._tags)

    @classmethod
    def from_bson(cls, bson: Any) -> 'TagList':
        if bson is None:
            return cls()
        if not isinstance(bson, list):
            raise ValueError(f"Expected a list for TagList. Instead received {type(bson).__name__}")
        return cls(bson)
