from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any, Generic, TypeVar

from bson import ObjectId
from bson.errors import InvalidId

from .manager_config import ManagerConfig
from .parameter_resolver import ParameterResolver
from ..document.document import Document
from ..document.document_id import to_document_id
from ..document.document_store import DocumentStore
from ..events.event_dispatcher import EventDispatcher, SignalEventDispatcher
from ..events.generic_event import GenericEvent
from ..pagination.page import Page
from ..pagination.paginator import Paginator, QueryPaginator
from ..query.aggregation_pipeline import AggregationSpec, group_count_expression
from ..query.document_query import DocumentQuery
from ..query.field_name import dashes_to_camel_case
from ..query.filter_clause import FilterClause, apply_filters, parse_filters
from ..query.free_text_query import FreeTextQuery
from ..query.sort_direction import SortDirection
from ..request.request_context import FlaskRequestContext, RequestContext
from ..utilities.configuration_error import ConfigurationError
from ..utilities.invalid_date import InvalidDate
from ..utilities.logger import logger
from ..utilities.normalize_date import normalize_date, normalize_date_to_mongo
from ..utilities.result_errors import NotFoundError
from ..utilities.undefined import UNDEFINED



T = TypeVar('T', bound=Document)

Filters = Iterable[FilterClause | Mapping[str, Any]] | None
""" A list of FilterClause, or of dicts such as { "field": "id", "selector": "equals", "value": 12 }. """

class GenericDocumentManager(Generic[T]):
	""" List, count, aggregate, look up and persist the documents of one collection, as described by a ManagerConfig.

	Every operation builds its query from the config and the current request, so the manager keeps no state between calls.
	The config is immutable. To vary it per request, derive a new manager with configure() or with_config().

	Collaborators are passed in:
		- store: where queries, aggregations and writes go
		- event_dispatcher: receives notify()/dispatch() events (a private SignalEventDispatcher if omitted)
		- request_context: source of request parameters (the current Flask request if omitted)
		- paginator: turns a query into a Page (QueryPaginator if omitted)

	save() and remove() are not transactional. See DocumentStore.flush().
	"""

	def __init__(
			self,
			config: ManagerConfig,
			*,
			store: DocumentStore,
			event_dispatcher: EventDispatcher | None = None,
			request_context: RequestContext | None = None,
			paginator: Paginator | None = None
		) -> None:
		self.config = config
		self.store = store
		self.event_dispatcher = event_dispatcher if event_dispatcher is not None else SignalEventDispatcher()
		self.request_context = request_context if request_context is not None else FlaskRequestContext()
		self.paginator = paginator if paginator is not None else QueryPaginator()
		self.resolver = ParameterResolver(config, self.request_context)

	@property
	def document_cls(self) -> type[T]:
		return self.config.document_cls # type: ignore

	def with_config(self, config: ManagerConfig) -> 'GenericDocumentManager[T]':
		""" A manager with the same collaborators and a different config. """
		return GenericDocumentManager(
			config,
			store=self.store,
			event_dispatcher=self.event_dispatcher,
			request_context=self.request_context,
			paginator=self.paginator
		)

	def configure(self, **changes: Any) -> 'GenericDocumentManager[T]':
		""" Shortcut for with_config(config.replace(**changes)). """
		return self.with_config(self.config.replace(**changes))

	# region: Query building
	def build_free_text(self, term: Any) -> FreeTextQuery | None:
		return FreeTextQuery.build(term, self.config.query_fields, escape=self.config.escape_free_text)

	def create_query(self, filters: Filters = None, query: Any = None) -> DocumentQuery[T]:
		""" A query narrowed by the filters and, when `query` is a non-empty term, by the free-text search. """
		# Filters and the search config are validated before the store is touched
		clauses = parse_filters(filters)
		free_text = self.build_free_text(query)

		qb = self.store.create_query(self.document_cls)
		apply_filters(qb, clauses)
		if free_text:
			free_text.apply_to(qb)
		return qb

	def add_sort(self, qb: DocumentQuery[T], field_name: str, direction: Any) -> DocumentQuery[T]:
		""" Sort fields may arrive dash-separated from the client ("created-at"); they are stored camelCase ("createdAt"). """
		return qb.sort(dashes_to_camel_case(field_name), self._resolve_sort_direction(direction))

	def _resolve_sort_direction(self, direction: Any) -> SortDirection:
		try:
			return SortDirection.parse(direction)
		except ConfigurationError:
			# The config default is validated, so a bad value here came from the request
			logger.warning(f"Ignoring invalid sort direction {direction!r} for {self.document_cls.__name__}, sorting ascending")
			return SortDirection.ASCENDING

	def _resolve_positive_int(self, parameter: str) -> int:
		value = self.resolver.resolve(parameter)
		default = self.config.default_for(parameter)
		try:
			number = int(value)
		except (TypeError, ValueError):
			number = 0
		if number < 1:
			logger.warning(f"Ignoring invalid {parameter} {value!r} for {self.document_cls.__name__}, using {default}")
			return default
		return number
	# endregion

	# region: Reading
	def get_documents(self, filters: Filters = None, primes: Iterable[str] | None = None, query: Any = UNDEFINED) -> Page[T]:
		""" One page of documents matching the filters and the free-text query, sorted as requested. No match gives an empty page. """
		query = self.resolver.resolve("query", query)
		page = self._resolve_positive_int("page")
		items_per_page = self._resolve_positive_int("items_per_page")
		sort_by = self.resolver.resolve("sort_by")
		sort_dir = self.resolver.resolve("sort_dir")

		qb = self.create_query(filters, query)

		for field_name in primes or []:
			qb.prime(field_name)

		if sort_by:
			qb = self.add_sort(qb, sort_by, sort_dir)

		logger.debug(f"Listing {self.document_cls.__name__}: page {page}, {items_per_page} per page, filter {qb.get_filter()}, sort {qb.get_sort()}")
		return self.paginator.paginate(qb, page, items_per_page)

	def count(self, filters: Filters = None, query: Any = False) -> int:
		""" Number of documents matching the filters.
		The free-text search is only applied when `query` is truthy: pass a term to search for it, or True to use the request/default term. """
		term = None
		if query:
			term = self.resolver.resolve("query", UNDEFINED if query is True else query)
		return self.create_query(filters, term).count()

	def count_by_group(self, field_group: str, match: Mapping[str, Any] | None = None, query: Any = UNDEFINED, sort: Mapping[str, Any] | None = None, limit: int | None = None) -> list[dict[str, Any]]:
		""" Count documents per value of `field_group`. Returns [{ "_id": value, "count": n }, ...] """
		return self.aggregate_group(group_count_expression(field_group), match, query, sort, limit)

	def aggregate_group(self, group: Mapping[str, Any], match: Mapping[str, Any] | None = None, query: Any = UNDEFINED, sort: Mapping[str, Any] | None = None, limit: int | None = None) -> list[dict[str, Any]]:
		""" Aggregate with a custom $group expression.
		`match` is a native filter document. A free-text query is merged into it under "$or", replacing any "$or" the caller passed. """
		term = self.resolver.resolve("query", query)

		spec = AggregationSpec(group=group, match=dict(match) if match else {}, sort=sort, limit=limit)
		free_text = self.build_free_text(term)
		if free_text:
			spec.merge_match(free_text.to_match_document())

		return spec.execute(self.store, self.document_cls)

	def find(self, document_id: ObjectId | str, filters: Filters = None) -> T:
		""" The document with this _id, if it also matches the filters. Raises NotFoundError otherwise. """
		try:
			native_id = to_document_id(document_id)
		except InvalidId:
			raise NotFoundError(self.document_cls.__name__, { "_id": document_id }) from None

		qb = self.create_query(filters)
		qb.field("_id").equals(native_id)
		return qb.get_single_result()

	def find_by(self, criteria: Mapping[str, Any] | None = None, sort: Mapping[str, Any] | None = None) -> list[T]:
		return self.store.get_repository(self.document_cls).find_by(criteria, sort=sort)

	def find_one_by(self, criteria: Mapping[str, Any] | None = None, sort: Mapping[str, Any] | None = None) -> T | None:
		return self.store.get_repository(self.document_cls).find_one_by(criteria, sort=sort)
	# endregion

	# region: Writing
	def save(self, documents: T | Iterable[T]) -> None:
		""" Stage every document, then flush once. """
		documents = self._as_list(documents)
		for document in documents:
			self.store.persist(document)
		self.store.flush()
		logger.debug(f"Saved {len(documents)} documents of type '{self.document_cls.__name__}'")

	def remove(self, documents: T | Iterable[T]) -> bool:
		""" Stage every document for deletion, then flush once. Returns False, without touching the store, when there is nothing to remove. """
		documents = self._as_list(documents)
		if not documents:
			return False

		for document in documents:
			self.store.remove(document)
		self.store.flush()
		logger.debug(f"Removed {len(documents)} documents of type '{self.document_cls.__name__}'")
		return True

	@staticmethod
	def get_identifiers(documents: Iterable[Document]) -> list[ObjectId]:
		""" The ObjectIds of the documents, e.g. to build an "in" filter. """
		return [to_document_id(document.get_id()) for document in documents]

	@staticmethod
	def _as_list(documents: Any) -> list:
		""" Every item is checked before any is staged. A bad item leaves nothing staged. """
		if isinstance(documents, Document):
			return [documents]
		documents = list(documents)
		for document in documents:
			if not isinstance(document, Document):
				raise TypeError(f"Expected Document type, but got {type(document).__name__}")
		return documents
	# endregion

	# region: Events
	def dispatch(self, key: str, arguments: Mapping[str, Any] | None = None, subject: Any = None) -> GenericEvent:
		""" Create a GenericEvent and dispatch it under `key`. Returns the event. """
		event = GenericEvent(key, dict(arguments) if arguments else {}, subject)
		self.event_dispatcher.dispatch(key, event)
		return event

	def notify(self, action: str, arguments: Mapping[str, Any] | None = None, subject: Any = None) -> GenericEvent:
		""" Dispatch under the config's event namespace: notify("created") -> "<key>.created". """
		if not self.config.key:
			raise ConfigurationError(f"No event key configured for {self.document_cls.__name__}. Call set_key() on the builder.")
		return self.dispatch(f"{self.config.key}.{action}", arguments, subject)
	# endregion

	# region: Dates
	@staticmethod
	def normalize_date(value: datetime | str | None) -> datetime | InvalidDate:
		return normalize_date(value)

	@staticmethod
	def normalize_date_to_mongo(value: datetime | str | None) -> datetime | InvalidDate:
		return normalize_date_to_mongo(value)
	# endregion
