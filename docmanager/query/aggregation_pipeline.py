from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
import time

from pymongo.errors import PyMongoError

from .sort_direction import SortDirection
from ..utilities.configuration_error import ConfigurationError
from ..utilities.store_execution_error import StoreExecutionError
from ..utilities.logger import logger

from typing import TYPE_CHECKING
if TYPE_CHECKING:
	from ..document.document import Document
	from ..document.document_store import DocumentStore


def _sort_value(direction: Any) -> Any:
	""" Mapping values such as { "$meta": "textScore" } are passed through as they are. """
	if isinstance(direction, Mapping):
		return dict(direction)
	return int(SortDirection.parse(direction))

def group_count_expression(field_group: str) -> dict[str, Any]:
	""" { _id: $field, count: { $sum: 1 } } """
	return {
		"_id": f"${field_group}",
		"count": { "$sum": 1 }
	}

@dataclass
class AggregationSpec:
	""" A grouped aggregation. Stages are always emitted as $match -> $group -> $sort -> $limit. $match is omitted when empty and $limit unless positive. """
	group: Mapping[str, Any]
	match: dict[str, Any] = field(default_factory=dict)
	sort: Mapping[str, Any] | None = None
	limit: int | None = None

	def __post_init__(self):
		if not self.group or "_id" not in self.group:
			raise ConfigurationError(f"A group expression needs an _id. Got {self.group!r}.")
		self.match = dict(self.match) if self.match else {}

	def merge_match(self, extra: Mapping[str, Any]) -> None:
		""" Union of keys. On a key collision the value from `extra` wins. """
		self.match = self.match | dict(extra)

	def to_pipeline(self) -> list[dict[str, Any]]:
		pipeline: list[dict[str, Any]] = []

		if self.match:
			pipeline.append({ "$match": self.match })
		
		pipeline.append({ "$group": dict(self.group) })

		if self.sort:
			pipeline.append({ "$sort": { key: _sort_value(direction) for key, direction in self.sort.items() } })

		if isinstance(self.limit, int) and not isinstance(self.limit, bool) and self.limit > 0:
			pipeline.append({ "$limit": self.limit })

		return pipeline

	def execute(self, store: 'DocumentStore', document_cls: 'type[Document]') -> list[dict[str, Any]]:
		""" Runs the pipeline on the document class's collection and materializes every group. """
		start_time = time.time()
		pipeline = self.to_pipeline()
		try:
			results = list(store.get_collection(document_cls).aggregate(pipeline))
		except PyMongoError as e:
			raise StoreExecutionError("aggregate", document_cls.__name__, e) from e
		
		logger.debug(f"Aggregated {len(results)} groups of type '{document_cls.__name__}' for pipeline: {pipeline} in {(time.time() - start_time):.3f} seconds")
		return results
