from .manager_error import ManagerError


class StoreExecutionError(ManagerError):
    """ Wraps a failure coming from the store driver with the operation and document type that triggered it.
    The driver exception is kept as __cause__. """

    def __init__(self, operation: str, document_type: str, cause: BaseException):
        self.operation = operation
        self.document_type = document_type
        self.cause = cause
        super().__init__(f"Store error during '{operation}' on {document_type}: {cause}")
