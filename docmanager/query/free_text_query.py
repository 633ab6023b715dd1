import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from ..utilities.configuration_error import ConfigurationError

from typing import TYPE_CHECKING
if TYPE_CHECKING:
	from .document_query import DocumentQuery


@dataclass(frozen=True)
class FreeTextQuery:
	""" A search term matched as a case-insensitive substring against any of the fields (OR).

	There are two renderings of the same predicate:
		- apply_to() adds one OR expression per field to a DocumentQuery (find/count)
		- to_match_document() returns the equivalent $match body for an aggregation pipeline

	With escape=True (the default) the term is matched literally. With escape=False it is used as a raw regular expression,
	which lets callers pass pattern syntax through. Only do this for trusted input. """
	term: str
	fields: tuple[str, ...]
	escape: bool = True

	@classmethod
	def build(cls, term: Any, fields: Iterable[str], escape: bool = True) -> 'FreeTextQuery | None':
		""" Returns None when there is nothing to search for. """
		if term is None or term == "" or term is False:
			return None
		fields = tuple(fields)
		if not fields:
			raise ConfigurationError(f"Can't search for {term!r}: no query fields are configured.")
		return cls(term=str(term), fields=fields, escape=escape)

	@property
	def pattern(self) -> str:
		return re.escape(self.term) if self.escape else self.term

	def expressions(self) -> list[dict[str, Any]]:
		return [{ field: { "$regex": self.pattern, "$options": "i" } } for field in self.fields]

	def apply_to(self, query: 'DocumentQuery') -> 'DocumentQuery':
		for expression in self.expressions():
			query.add_or(expression)
		return query

	def to_match_document(self, operator: str = "$or") -> dict[str, Any]:
		return { operator: self.expressions() }
