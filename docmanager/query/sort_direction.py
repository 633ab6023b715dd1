from enum import IntEnum
from typing import Any

import pymongo

from ..utilities.configuration_error import ConfigurationError


class SortDirection(IntEnum):
    ASCENDING = pymongo.ASCENDING
    DESCENDING = pymongo.DESCENDING

    @classmethod
    def parse(cls, value: Any) -> 'SortDirection':
        """ Accepts "asc"/"desc" in any case, 1/-1 (also as strings), or None for ascending. """
        if value is None or value == "":
            return cls.ASCENDING
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in ("asc", "ascending", "1"):
                return cls.ASCENDING
            if lowered in ("desc", "descending", "-1"):
                return cls.DESCENDING
        elif isinstance(value, int) and not isinstance(value, bool) and value in (1, -1):
            return cls(value)
        raise ConfigurationError(f"Invalid sort direction {value!r}. Use 'asc', 'desc', 1 or -1.")
