from typing import Any

from bson import ObjectId
from bson.errors import InvalidId


def to_document_id(value: Any) -> ObjectId:
	""" Converts an identifier (usually the hex string from a URL) into the store's native ObjectId.
	Raises InvalidId when the value can't be converted. """
	if isinstance(value, ObjectId):
		return value
	if not isinstance(value, (str, bytes)):
		raise InvalidId(f"{value!r} is not a valid document id. It must be an ObjectId, a 24-character hex string or 12 bytes.")
	return ObjectId(value)
