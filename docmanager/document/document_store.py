from typing import TypeVar

from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from .document import Document
from .document_repository import DocumentRepository
from .staged_operation import StagedOperation
from ..query.document_query import DocumentQuery
from ..utilities.store_execution_error import StoreExecutionError
from ..utilities.logger import logger


T = TypeVar('T', bound=Document)

class DocumentStore:
	""" The handle the manager uses to reach MongoDB: queries, raw collections, repositories and staged writes.

	Writes are staged with persist()/remove() and sent by flush(), one write per document in staging order.
	flush() is NOT atomic: if a write fails, the writes before it stay committed and nothing is rolled back.
	Re-query to find out what was stored.

	A DocumentStore keeps the staged writes in memory, so share one between threads only if they never stage concurrently.
	"""

	def __init__(self, db: Database) -> None:
		self.db = db
		self._staged: list[tuple[StagedOperation, Document]] = []

	@classmethod
	def from_environment(cls) -> 'DocumentStore':
		""" Uses the MONGO_URL and MONGO_DB_NAME environment variables. """
		from .mongo_db import create_mongo_db
		return cls(create_mongo_db())

	# Reading
	def get_collection(self, document_cls: type[Document]) -> Collection:
		""" Returns the corresponding Pymongo Collection. """
		return self.db[document_cls.get_collection_name()]

	def create_query(self, document_cls: type[T]) -> DocumentQuery[T]:
		return DocumentQuery(self, document_cls)

	def get_repository(self, document_cls: type[T]) -> DocumentRepository[T]:
		return DocumentRepository(self, document_cls)

	# Writing
	def persist(self, document: Document) -> None:
		""" Stage an insert-or-replace of the document. Nothing is written until flush(). """
		if not isinstance(document, Document):
			raise TypeError(f"Expected Document type, but got {type(document).__name__}")
		self._staged.append((StagedOperation.PERSIST, document))

	def remove(self, document: Document) -> None:
		""" Stage a delete of the document. Nothing is written until flush(). """
		if not isinstance(document, Document):
			raise TypeError(f"Expected Document type, but got {type(document).__name__}")
		self._staged.append((StagedOperation.REMOVE, document))

	def has_staged(self) -> bool:
		return bool(self._staged)

	def flush(self) -> None:
		""" Send every staged write, in staging order. The staging area is cleared whether or not the writes succeed. """
		staged, self._staged = self._staged, []

		for operation, document in staged:
			document_cls = type(document)
			collection = self.get_collection(document_cls)
			try:
				if operation is StagedOperation.PERSIST:
					collection.replace_one({ "_id": document.get_id() }, document.to_document(), upsert=True)
				else:
					collection.delete_one({ "_id": document.get_id() })
			except PyMongoError as e:
				raise StoreExecutionError("flush", document_cls.__name__, e) from e

		if staged:
			logger.debug(f"Flushed {len(staged)} staged writes")
