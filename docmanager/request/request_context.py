from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from flask import has_request_context, request


@runtime_checkable
class RequestContext(Protocol):
    """ Where request-sourced parameters (page, q, per_page, ...) are read from. Read-only. """
    def get(self, key: str, default: Any = None) -> Any: ...

class FlaskRequestContext:
    """ Reads from the query string of the current Flask request. Outside of a request every key returns its default. """

    def get(self, key: str, default: Any = None) -> Any:
        if not has_request_context():
            return default
        return request.args.get(key, default)

class MappingRequestContext:
    """ Serves parameters from a plain mapping, e.g. for jobs that run outside of Flask. """

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self.values = values if values is not None else {}

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)
