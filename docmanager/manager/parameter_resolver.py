from typing import Any

from .manager_config import ManagerConfig, ResolutionMode
from ..request.request_context import RequestContext
from ..utilities.undefined import UNDEFINED


class ParameterResolver:
    """ Works out the effective value of a parameter:

    1. an explicit value wins (what counts as explicit depends on config.resolution_mode)
    2. otherwise, if the parameter is accepted from the request, the request value, falling back to the default
    3. otherwise the static default from the config, without looking at the request

    NOTE: In ResolutionMode.TRUTHY (the default) an explicit 0 or "" is treated as missing. resolve("items_per_page", 0)
    with a default of 10 and nothing in the request gives 10. Use ResolutionMode.PROVIDED to honour falsy values.
    """

    def __init__(self, config: ManagerConfig, request_context: RequestContext) -> None:
        self.config = config
        self.request_context = request_context

    def is_provided(self, value: Any) -> bool:
        if self.config.resolution_mode is ResolutionMode.PROVIDED:
            return value is not UNDEFINED and value is not None
        return bool(value)

    def resolve(self, parameter: str, value: Any = UNDEFINED) -> Any:
        default = self.config.default_for(parameter)

        if self.is_provided(value):
            return value

        if parameter in self.config.accepted_from_request:
            request_key = self.config.mapping_from_request[parameter]
            return self.request_context.get(request_key, default)

        return default
