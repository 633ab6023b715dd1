from enum import StrEnum, auto


class StagedOperation(StrEnum):
    """ Describes what flush() will do with a staged document. """
    PERSIST = auto()
    REMOVE = auto()
