"""
docmanager: a configurable list/count/aggregate/persist layer over MongoDB collections.

    config = ManagerConfigBuilder(Organization).set_key("organization").set_query_fields(["name", "type"]).build()
    manager = GenericDocumentManager(config, store=DocumentStore.from_environment())
    page = manager.get_documents(filters=[{ "field": "active", "selector": "equals", "value": True }])
"""

from .document.document import Document
from .document.document_store import DocumentStore
from .document.document_repository import DocumentRepository
from .document.mongo_db import create_mongo_db
from .document.capabilities import AttributeBag, TagList
from .events import GenericEvent, EventDispatcher, SignalEventDispatcher
from .manager import GenericDocumentManager, ManagerConfig, ManagerConfigBuilder, ParameterResolver, ResolutionMode
from .pagination import Page, Paginator, QueryPaginator
from .query import AggregationSpec, DocumentQuery, FilterClause, FilterOperator, FreeTextQuery, SortDirection, dashes_to_camel_case
from .request import FlaskRequestContext, MappingRequestContext, RequestContext
from .utilities import (
    AmbiguousResultError,
    ConfigurationError,
    INVALID_DATE,
    ManagerError,
    NotFoundError,
    StoreExecutionError,
    UNDEFINED,
    add_log_handler,
    set_log_level,
)
from .utilities.normalize_date import normalize_date, normalize_date_to_mongo
