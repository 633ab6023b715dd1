from typing import Any, Generic, Self, TypeVar
import time

from pymongo.errors import PyMongoError

from .filter_clause import FilterOperator
from .sort_direction import SortDirection
from ..utilities.configuration_error import ConfigurationError
from ..utilities.result_errors import AmbiguousResultError, NotFoundError
from ..utilities.store_execution_error import StoreExecutionError
from ..utilities.logger import logger

from typing import TYPE_CHECKING
if TYPE_CHECKING:
	from ..document.document import Document
	from ..document.document_store import DocumentStore


T = TypeVar('T', bound='Document')

class FieldExpression(Generic[T]):
	""" Returned by DocumentQuery.field(). Each operator narrows the query and hands the query back, so calls chain:

		query.field("age").gte(18).field("status").equals("active")
	"""

	def __init__(self, query: 'DocumentQuery[T]', field_name: str) -> None:
		self.query = query
		self.field_name = field_name

	def operator(self, operator: FilterOperator | str, value: Any) -> 'DocumentQuery[T]':
		operator = FilterOperator.parse(operator)
		return self.query.add_criteria({ self.field_name: { operator.mongo_operator: value } })

	def equals(self, value: Any) -> 'DocumentQuery[T]':
		return self.operator(FilterOperator.EQUALS, value)

	def not_equal(self, value: Any) -> 'DocumentQuery[T]':
		return self.operator(FilterOperator.NOT_EQUAL, value)

	def gt(self, value: Any) -> 'DocumentQuery[T]':
		return self.operator(FilterOperator.GREATER_THAN, value)

	def gte(self, value: Any) -> 'DocumentQuery[T]':
		return self.operator(FilterOperator.GREATER_THAN_OR_EQUAL, value)

	def lt(self, value: Any) -> 'DocumentQuery[T]':
		return self.operator(FilterOperator.LESS_THAN, value)

	def lte(self, value: Any) -> 'DocumentQuery[T]':
		return self.operator(FilterOperator.LESS_THAN_OR_EQUAL, value)

	def in_(self, values: list[Any]) -> 'DocumentQuery[T]':
		return self.operator(FilterOperator.IN, list(values))

	def not_in(self, values: list[Any]) -> 'DocumentQuery[T]':
		return self.operator(FilterOperator.NOT_IN, list(values))

	def exists(self, value: bool = True) -> 'DocumentQuery[T]':
		return self.operator(FilterOperator.EXISTS, value)

	def all(self, values: list[Any]) -> 'DocumentQuery[T]':
		return self.operator(FilterOperator.ALL, list(values))

	def size(self, value: int) -> 'DocumentQuery[T]':
		return self.operator(FilterOperator.SIZE, value)

	def prime(self) -> 'DocumentQuery[T]':
		return self.query.prime(self.field_name)

class DocumentQuery(Generic[T]):
	""" Incrementally builds a find() against the collection of one Document class.

	Criteria added through field()/add_criteria() are combined with $and in the order they were added.
	Expressions added through add_or() form a single $or group, which is ANDed with the rest. """

	def __init__(self, store: 'DocumentStore', document_cls: type[T]) -> None:
		self.store = store
		self.document_cls = document_cls
		self._criteria: list[dict[str, Any]] = []
		self._or_expressions: list[dict[str, Any]] = []
		self._sort: list[tuple[str, int]] = []
		self._primes: list[str] = []

	# Building
	def field(self, field_name: str) -> FieldExpression[T]:
		return FieldExpression(self, field_name)

	def add_criteria(self, criteria: dict[str, Any]) -> Self:
		self._criteria.append(criteria)
		return self

	def add_or(self, expression: dict[str, Any]) -> Self:
		self._or_expressions.append(expression)
		return self

	def sort(self, field_name: str, direction: Any = None) -> Self:
		self._sort.append((field_name, int(SortDirection.parse(direction))))
		return self

	def prime(self, field_name: str) -> Self:
		""" Mark a reference field to be loaded along with the results. The field must be declared in the document's __references__. """
		if field_name not in self.document_cls.get_references():
			raise ConfigurationError(f"Can't prime '{field_name}': it is not declared in {self.document_cls.__name__}.__references__.")
		if field_name not in self._primes:
			self._primes.append(field_name)
		return self

	def get_filter(self) -> dict[str, Any]:
		clauses = list(self._criteria)
		if self._or_expressions:
			clauses.append({ "$or": list(self._or_expressions) })
		
		if not clauses:
			return {}
		if len(clauses) == 1:
			return clauses[0]
		return { "$and": clauses }

	def get_sort(self) -> list[tuple[str, int]]:
		return list(self._sort)

	def get_primes(self) -> list[str]:
		return list(self._primes)

	# Execution
	def count(self) -> int:
		query = self.get_filter()
		try:
			return self.store.get_collection(self.document_cls).count_documents(query)
		except PyMongoError as e:
			raise StoreExecutionError("count", self.document_cls.__name__, e) from e

	def execute(self, skip: int | None = None, limit: int | None = None) -> list[T]:
		""" Runs the query and returns all matching documents as Python objects. """
		start_time = time.time()
		query = self.get_filter()

		try:
			cursor = self.store.get_collection(self.document_cls).find(query)
			if self._sort:
				cursor = cursor.sort(self._sort)
			if skip:
				cursor = cursor.skip(skip)
			if limit:
				cursor = cursor.limit(limit)
			documents = list(cursor)
		except PyMongoError as e:
			raise StoreExecutionError("find", self.document_cls.__name__, e) from e

		objs = [self.document_cls.from_document(document) for document in documents]
		self._prime_references(objs)

		logger.debug(f"Retrieved {len(objs)} documents of type '{self.document_cls.__name__}' for query: {query} in {(time.time() - start_time):.3f} seconds")
		return objs

	def get_single_result(self) -> T:
		""" Requires exactly one match. """
		objs = self.execute(limit=2)
		if not objs:
			raise NotFoundError(self.document_cls.__name__, self.get_filter())
		if len(objs) > 1:
			raise AmbiguousResultError(self.document_cls.__name__, self.get_filter())
		return objs[0]

	def _prime_references(self, objs: list[T]) -> None:
		""" Replaces stored ids in primed fields by the referenced documents, one $in query per field. Ids that don't resolve are left as they are. """
		references = self.document_cls.get_references()
		for field_name in self._primes:
			ids = []
			for obj in objs:
				value = getattr(obj, field_name, None)
				if isinstance(value, list):
					ids.extend(value)
				elif value is not None:
					ids.append(value)
			if not ids:
				continue

			referenced_cls = references[field_name]
			repository = self.store.get_repository(referenced_cls)
			referenced = { document.get_id(): document for document in repository.find_by({ "_id": { "$in": ids } }) }

			for obj in objs:
				value = getattr(obj, field_name, None)
				if isinstance(value, list):
					setattr(obj, field_name, [referenced.get(item, item) for item in value])
				elif value is not None:
					setattr(obj, field_name, referenced.get(value, value))
