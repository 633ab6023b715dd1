from .manager_error import ManagerError
from .configuration_error import ConfigurationError
from .result_errors import NotFoundError, AmbiguousResultError
from .store_execution_error import StoreExecutionError
from .undefined import UNDEFINED, Undefined
from .invalid_date import INVALID_DATE, InvalidDate
from .logger import logger, set_log_level, add_log_handler
