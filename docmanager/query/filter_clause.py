from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from ..utilities.configuration_error import ConfigurationError

from typing import TYPE_CHECKING
if TYPE_CHECKING:
	from .document_query import DocumentQuery


class FilterOperator(StrEnum):
	""" The operators a filter may use. The values are the names clients send ("selector" in the wire format). """
	EQUALS = "equals"
	NOT_EQUAL = "notEqual"
	GREATER_THAN = "gt"
	GREATER_THAN_OR_EQUAL = "gte"
	LESS_THAN = "lt"
	LESS_THAN_OR_EQUAL = "lte"
	IN = "in"
	NOT_IN = "notIn"
	EXISTS = "exists"
	ALL = "all"
	SIZE = "size"

	@property
	def mongo_operator(self) -> str:
		return _MONGO_OPERATORS[self]
	
	@classmethod
	def parse(cls, value: 'FilterOperator | str') -> 'FilterOperator':
		if isinstance(value, FilterOperator):
			return value
		try:
			return cls(value)
		except ValueError:
			allowed = ", ".join(operator.value for operator in cls)
			raise ConfigurationError(f"Unsupported filter operator '{value}'. Allowed operators: {allowed}.") from None

_MONGO_OPERATORS: dict[FilterOperator, str] = {
	FilterOperator.EQUALS: "$eq",
	FilterOperator.NOT_EQUAL: "$ne",
	FilterOperator.GREATER_THAN: "$gt",
	FilterOperator.GREATER_THAN_OR_EQUAL: "$gte",
	FilterOperator.LESS_THAN: "$lt",
	FilterOperator.LESS_THAN_OR_EQUAL: "$lte",
	FilterOperator.IN: "$in",
	FilterOperator.NOT_IN: "$nin",
	FilterOperator.EXISTS: "$exists",
	FilterOperator.ALL: "$all",
	FilterOperator.SIZE: "$size",
}

_SEQUENCE_OPERATORS = (FilterOperator.IN, FilterOperator.NOT_IN, FilterOperator.ALL)

@dataclass(frozen=True)
class FilterClause:
	""" One field/operator/value condition. A list of clauses is applied with AND, in order. """
	field: str
	operator: FilterOperator
	value: Any = None

	def __post_init__(self):
		if not self.field or not isinstance(self.field, str):
			raise ConfigurationError(f"Filter field must be a non-empty string. Got {self.field!r}.")
		object.__setattr__(self, "operator", FilterOperator.parse(self.operator))
		if self.operator in _SEQUENCE_OPERATORS:
			if isinstance(self.value, (str, bytes)) or not isinstance(self.value, Iterable):
				raise ConfigurationError(f"Filter operator '{self.operator}' on '{self.field}' expects a list of values.")
			object.__setattr__(self, "value", list(self.value))

	@classmethod
	def from_dict(cls, data: Mapping[str, Any]) -> 'FilterClause':
		""" Accepts {"field", "operator", "value"} as well as the {"field", "selector", "value"} wire format. """
		operator = data.get("operator", data.get("selector"))
		if operator is None:
			raise ConfigurationError(f"Filter {dict(data)} does not specify an operator.")
		if "field" not in data:
			raise ConfigurationError(f"Filter {dict(data)} does not specify a field.")
		return cls(field=data["field"], operator=operator, value=data.get("value"))

	def to_criteria(self) -> dict[str, Any]:
		return { self.field: { self.operator.mongo_operator: self.value } }

	def apply_to(self, query: 'DocumentQuery') -> 'DocumentQuery':
		return query.field(self.field).operator(self.operator, self.value)

def parse_filters(filters: Iterable[FilterClause | Mapping[str, Any]] | None) -> list[FilterClause]:
	""" Builds every clause up front. A bad operator fails before anything is executed. """
	if not filters:
		return []
	clauses: list[FilterClause] = []
	for filter_ in filters:
		if isinstance(filter_, FilterClause):
			clauses.append(filter_)
		elif isinstance(filter_, Mapping):
			clauses.append(FilterClause.from_dict(filter_))
		else:
			raise ConfigurationError(f"Filters must be FilterClause or dict. Got {type(filter_).__name__}.")
	return clauses

def apply_filters(query: 'DocumentQuery', filters: Iterable[FilterClause | Mapping[str, Any]] | None) -> 'DocumentQuery':
	for clause in parse_filters(filters):
		clause.apply_to(query)
	return query
