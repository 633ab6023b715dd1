from typing import Any, Callable, Protocol, runtime_checkable

from blinker import Namespace, NamedSignal

from .generic_event import GenericEvent
from ..utilities.logger import logger


@runtime_checkable
class EventDispatcher(Protocol):
    def dispatch(self, key: str, event: GenericEvent) -> GenericEvent: ...

class SignalEventDispatcher:
    """ Dispatches events as blinker signals, one signal per event key. Receivers are called synchronously:

        dispatcher.connect("organization.created", on_created)

        def on_created(sender, event: GenericEvent): ...
    """

    def __init__(self, namespace: Namespace | None = None) -> None:
        self.namespace = namespace if namespace is not None else Namespace()

    def signal(self, key: str) -> NamedSignal:
        return self.namespace.signal(key)

    def connect(self, key: str, receiver: Callable[..., Any]) -> Callable[..., Any]:
        # Held strongly: lambdas stay connected
        self.signal(key).connect(receiver, weak=False)
        return receiver

    def dispatch(self, key: str, event: GenericEvent) -> GenericEvent:
        results = self.signal(key).send(self, event=event)
        logger.debug(f"Dispatched event '{key}' to {len(results)} receivers")
        return event
