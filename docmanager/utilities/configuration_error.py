from .manager_error import ManagerError


class ConfigurationError(ManagerError):
    """Exception raised for configuration errors.
    Raised while a config, filter or query is being built, never during execution. """
