from .generic_event import GenericEvent
from .event_dispatcher import EventDispatcher, SignalEventDispatcher
