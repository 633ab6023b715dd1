from .manager_config import ManagerConfig, ManagerConfigBuilder, ResolutionMode, PARAMETERS
from .parameter_resolver import ParameterResolver
from .generic_document_manager import GenericDocumentManager
