from collections.abc import Mapping
from typing import Any, Generic, TypeVar
import time

from pymongo.errors import PyMongoError

from ..query.sort_direction import SortDirection
from ..utilities.store_execution_error import StoreExecutionError
from ..utilities.logger import logger

from typing import TYPE_CHECKING
if TYPE_CHECKING:
	from .document import Document
	from .document_store import DocumentStore


T = TypeVar('T', bound='Document')

def to_sort_list(sort: Mapping[str, Any] | None) -> list[tuple[str, int]]:
	""" { "createdAt": "desc", "name": 1 } -> [("createdAt", -1), ("name", 1)] """
	if not sort:
		return []
	return [(field_name, int(SortDirection.parse(direction))) for field_name, direction in sort.items()]

class DocumentRepository(Generic[T]):
	""" Plain criteria lookups for one Document class. The criteria are native Mongo filter documents. """

	def __init__(self, store: 'DocumentStore', document_cls: type[T]) -> None:
		self.store = store
		self.document_cls = document_cls

	def find_by(self, criteria: Mapping[str, Any] | None = None, sort: Mapping[str, Any] | None = None, limit: int | None = None, skip: int | None = None) -> list[T]:
		""" Query the database and return all matching documents as Python objects. May be empty. """
		start_time = time.time()
		query = dict(criteria) if criteria else {}
		
		try:
			cursor = self.store.get_collection(self.document_cls).find(query)
			sort_list = to_sort_list(sort)
			if sort_list:
				cursor = cursor.sort(sort_list)
			if skip:
				cursor = cursor.skip(skip)
			if limit:
				cursor = cursor.limit(limit)
			documents = list(cursor)
		except PyMongoError as e:
			raise StoreExecutionError("find_by", self.document_cls.__name__, e) from e

		objs = [self.document_cls.from_document(document) for document in documents]
		logger.debug(f"Retrieved {len(objs)} documents of type '{self.document_cls.__name__}' for query: {query} in {(time.time() - start_time):.3f} seconds")
		return objs

	def find_one_by(self, criteria: Mapping[str, Any] | None = None, sort: Mapping[str, Any] | None = None) -> T | None:
		""" Query the database and return the first matching document as a Python object. Returns None if there are no matching documents. """
		objs = self.find_by(criteria, sort=sort, limit=1)
		if not objs:
			return None
		return objs[0]
