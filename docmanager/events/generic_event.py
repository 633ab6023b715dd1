from dataclasses import dataclass, field
from typing import Any


@dataclass
class GenericEvent:
    """ A named event with a free-form argument bag.

    Conventional arguments:

        {
            "notifyLanguage": "es",
            "notifyUserTrigger": user,
            "notifyUsers": [],
            "notifyExternal": "notify@email.com",
            "data": { "invitation": invitation }
        }
    """
    key: str
    arguments: dict[str, Any] = field(default_factory=dict)
    subject: Any = None
    """ The object the event is about, usually the document that changed. """

    def get_argument(self, name: str, default: Any = None) -> Any:
        return self.arguments.get(name, default)

    def has_argument(self, name: str) -> bool:
        return name in self.arguments

    def to_dict(self) -> dict:
        return { self.key: dict(self.arguments) }
