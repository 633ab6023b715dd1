from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Self, get_type_hints
import inspect

from bson import ObjectId

from .obj_to_bson import obj_to_bson
from .special_values import ABSTRACT
from ..utilities.logger import logger


@dataclass
class Document:
	""" A dataclass that inherits from Document can be saved to MongoDb as a document.
	Subclasses must be dataclasses and must set __collection_name__.

	Retrieved objects will have the _id from the database. Newly created objects are assigned a fresh ObjectId unless you specify one.

	Fields annotated with a capability type (AttributeBag, TagList, or anything with to_bson() and a from_bson() classmethod) are converted automatically.
	"""
	# Class fields
	__collection_name__: ClassVar[str] = ABSTRACT
	__references__: ClassVar[dict[str, type['Document']]] = {}
	""" Maps field name -> the Document class whose _id that field stores. Only these fields can be primed. """

	# Instance fields
	# Setting kw_only=True allows for subclasses to add other fields without the type checker complaining that non-default fields appear after default fields.
	_id: ObjectId = field(default_factory=ObjectId, kw_only=True)

	@classmethod
	def get_collection_name(cls) -> str:
		if not cls.__collection_name__ or cls.__collection_name__ == ABSTRACT:
			raise ValueError(f"Collection name not defined for {cls}. __collection_name__ must be specified for stored document classes.")
		return cls.__collection_name__
	
	@classmethod
	def get_references(cls) -> dict[str, type['Document']]:
		""" Returns the dictionary of foreign keys this Document stores as a dict of the field name -> referenced Document class. """
		return dict(cls.__references__)

	def get_id(self) -> ObjectId:
		return self._id

	# region: Document <> Bson
	def to_document(self) -> dict[str, Any]:
		document: dict[str, Any] = {}
		for dataclass_field in fields(self):
			document[dataclass_field.name] = obj_to_bson(getattr(self, dataclass_field.name))
		return document

	@classmethod
	def from_document(cls, document: dict[str, Any]) -> Self:
		if not isinstance(document, dict):
			raise TypeError(f"Expected a dict to build {cls.__name__}. Instead received {type(document).__name__}.")
		if "_id" not in document:
			raise ValueError(f"Can't build {cls.__name__} from a document without an _id.")
		
		type_hints = get_type_hints(cls)
		kwargs: dict[str, Any] = {}
		for dataclass_field in fields(cls):
			if not dataclass_field.init or dataclass_field.name not in document:
				continue
			bson = document[dataclass_field.name]
			annotation = type_hints.get(dataclass_field.name)
			# Capability fields know how to rebuild themselves
			if inspect.isclass(annotation) and hasattr(annotation, "from_bson"):
				kwargs[dataclass_field.name] = annotation.from_bson(bson)
			else:
				kwargs[dataclass_field.name] = bson
		
		unknown_keys = document.keys() - kwargs.keys()
		if unknown_keys:
			logger.debug(f"Ignoring unknown keys {sorted(unknown_keys)} while building {cls.__name__} {document['_id']}")
		return cls(**kwargs)
	# endregion
