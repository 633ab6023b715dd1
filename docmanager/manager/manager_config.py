from collections.abc import Iterable, Mapping
import dataclasses
from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import Any, Self

from bidict import BidictException, frozenbidict

from ..document.document import Document
from ..query.sort_direction import SortDirection
from ..utilities.configuration_error import ConfigurationError


PARAMETERS = ("query", "page", "items_per_page", "sort_by", "sort_dir")
""" The parameters a manager resolves for each operation. """

DEFAULT_MAPPING_FROM_REQUEST: frozenbidict[str, str] = frozenbidict({
	"items_per_page": "per_page",
	"page": "page",
	"query": "q",
	"sort_by": "sort_by",
	"sort_dir": "order",
})
""" Parameter name <-> request key. """

DEFAULT_ACCEPTED_FROM_REQUEST = frozenset({"page", "query"})

def to_request_mapping(mapping: Mapping[str, str]) -> frozenbidict[str, str]:
	""" Parameter -> request key. Two parameters can't share a request key. """
	try:
		return frozenbidict(mapping)
	except BidictException as e:
		raise ConfigurationError(f"Invalid mapping_from_request {dict(mapping)}: {e!r}. Every parameter needs its own request key.") from e

class ResolutionMode(StrEnum):
	""" How ParameterResolver decides that an explicit value was given. """
	TRUTHY = auto()
	""" Any truthy value wins. 0, "" and False count as "not given" and fall through to the request/default. """
	PROVIDED = auto()
	""" Any value other than UNDEFINED or None wins, including 0 and "". """

@dataclass(frozen=True)
class ManagerConfig:
	""" Everything a GenericDocumentManager needs to know about one collection. Immutable: use replace() or ManagerConfigBuilder to derive a new one. """
	document_cls: type[Document]
	key: str | None = None
	""" Namespace for events. """
	accepted_from_request: frozenset[str] = DEFAULT_ACCEPTED_FROM_REQUEST
	""" Parameters that may be read from the request. Every one must be a key of mapping_from_request. """
	mapping_from_request: frozenbidict[str, str] = field(default_factory=lambda: DEFAULT_MAPPING_FROM_REQUEST)
	items_per_page: int = 10
	page: int = 1
	query: str | None = None
	sort_by: str | None = None
	sort_dir: str | int | None = None
	query_fields: tuple[str, ...] = ()
	""" Fields searched by the free-text query. """
	resolution_mode: ResolutionMode = ResolutionMode.TRUTHY
	escape_free_text: bool = True

	def __post_init__(self):
		# Immutable, hashable collection types
		object.__setattr__(self, "accepted_from_request", frozenset(self.accepted_from_request))
		object.__setattr__(self, "mapping_from_request", to_request_mapping(self.mapping_from_request))
		object.__setattr__(self, "query_fields", tuple(self.query_fields))
		object.__setattr__(self, "resolution_mode", ResolutionMode(self.resolution_mode))
		self.validate()

	def validate(self) -> None:
		if not isinstance(self.document_cls, type) or not issubclass(self.document_cls, Document):
			raise ConfigurationError(f"document_cls must be a Document subclass. Got {self.document_cls!r}.")
		
		unknown = (set(self.accepted_from_request) | set(self.mapping_from_request.keys())) - set(PARAMETERS)
		if unknown:
			raise ConfigurationError(f"Unknown parameters {sorted(unknown)}. Known parameters: {', '.join(PARAMETERS)}.")
		
		unmapped = set(self.accepted_from_request) - set(self.mapping_from_request.keys())
		if unmapped:
			raise ConfigurationError(f"Parameters {sorted(unmapped)} are accepted from the request but have no request key in mapping_from_request.")
		
		if isinstance(self.items_per_page, bool) or not isinstance(self.items_per_page, int) or self.items_per_page <= 0:
			raise ConfigurationError(f"items_per_page must be a positive integer. Got {self.items_per_page!r}.")
		if isinstance(self.page, bool) or not isinstance(self.page, int) or self.page < 1:
			raise ConfigurationError(f"page must be an integer >= 1. Got {self.page!r}.")
		if self.sort_dir is not None:
			SortDirection.parse(self.sort_dir)

	def default_for(self, parameter: str) -> Any:
		""" The static default of a parameter. """
		if parameter not in PARAMETERS:
			raise ConfigurationError(f"Unknown parameter '{parameter}'. Known parameters: {', '.join(PARAMETERS)}.")
		return getattr(self, parameter)

	def replace(self, **changes: Any) -> 'ManagerConfig':
		""" Returns a validated copy with the given fields replaced. """
		return dataclasses.replace(self, **changes)

class ManagerConfigBuilder:
	""" Fluent construction of a ManagerConfig:

		config = (
			ManagerConfigBuilder()
			.set_document(Organization)
			.set_key("organization")
			.set_accept_from_request(["page", "query", "items_per_page"])
			.set_items_per_page(2)
			.set_query_fields(["name", "type"])
			.build()
		)
	"""

	def __init__(self, document_cls: type[Document] | None = None) -> None:
		self._values: dict[str, Any] = {}
		if document_cls is not None:
			self.set_document(document_cls)

	@classmethod
	def from_config(cls, config: ManagerConfig) -> 'ManagerConfigBuilder':
		builder = cls()
		builder._values = { name: getattr(config, name) for name in config.__dataclass_fields__ }
		return builder

	def set_document(self, document_cls: type[Document]) -> Self:
		self._values["document_cls"] = document_cls
		return self

	def set_key(self, key: str) -> Self:
		self._values["key"] = key
		return self

	def set_accept_from_request(self, parameters: Iterable[str]) -> Self:
		self._values["accepted_from_request"] = frozenset(parameters)
		return self

	def set_mapping_from_request(self, mapping: Mapping[str, str]) -> Self:
		""" Overrides request keys for the given parameters. Unlisted parameters keep their current key. """
		current = dict(self._values.get("mapping_from_request", DEFAULT_MAPPING_FROM_REQUEST))
		current.update(mapping)
		self._values["mapping_from_request"] = to_request_mapping(current)
		return self

	def set_items_per_page(self, items_per_page: int) -> Self:
		self._values["items_per_page"] = items_per_page
		return self

	def set_page(self, page: int) -> Self:
		self._values["page"] = page
		return self

	def set_query(self, query: str | None) -> Self:
		self._values["query"] = query
		return self

	def set_sort_by(self, sort_by: str | None) -> Self:
		self._values["sort_by"] = sort_by
		return self

	def set_sort_dir(self, sort_dir: str | int | None) -> Self:
		self._values["sort_dir"] = sort_dir
		return self

	def set_query_fields(self, query_fields: Iterable[str]) -> Self:
		self._values["query_fields"] = tuple(query_fields)
		return self

	def set_resolution_mode(self, resolution_mode: ResolutionMode) -> Self:
		self._values["resolution_mode"] = resolution_mode
		return self

	def set_escape_free_text(self, escape_free_text: bool) -> Self:
		self._values["escape_free_text"] = escape_free_text
		return self

	def build(self) -> ManagerConfig:
		if "document_cls" not in self._values:
			raise ConfigurationError("A document class is required. Call set_document() before build().")
		return ManagerConfig(**self._values)
