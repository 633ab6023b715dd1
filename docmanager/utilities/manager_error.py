class ManagerError(Exception):
    """Base class for every error raised by docmanager."""
    
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)
