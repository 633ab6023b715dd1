from .manager_error import ManagerError


class NotFoundError(ManagerError):
    """ Raised when a single-result lookup matches no document. """

    def __init__(self, document_type: str, criteria: object):
        self.document_type = document_type
        self.criteria = criteria
        super().__init__(f"No {document_type} found for query: {criteria}")

class AmbiguousResultError(ManagerError):
    """ Raised when a single-result lookup matches more than one document.
    For _id lookups this means the data is inconsistent. """

    def __init__(self, document_type: str, criteria: object):
        self.document_type = document_type
        self.criteria = criteria
        super().__init__(f"Expected a single {document_type} for query: {criteria}, but found several.")
