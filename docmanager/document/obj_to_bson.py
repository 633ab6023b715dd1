from datetime import datetime
from enum import Enum
from typing import Any

from bson import ObjectId
from bson.decimal128 import Decimal128
from bson.regex import Regex


_primitives = (str, int, float, bool, bytes, datetime, ObjectId, Decimal128, Regex)

def obj_to_bson(obj: Any) -> Any:
	"""
	Serializes a field value into Bson.
	Referenced Documents (for example after priming) are stored back as their _id.
	"""
	from .document import Document

	# Handle types from specific (complex) to general (simple)
	if isinstance(obj, Document):
		return obj.get_id()
	
	elif hasattr(obj, "to_bson"):
		return obj.to_bson()
	
	elif isinstance(obj, Enum):
		return obj.value

	elif isinstance(obj, dict):
		return {str(key): obj_to_bson(value) for key, value in obj.items()}
	
	elif isinstance(obj, (list, tuple, set, frozenset)):
		return [obj_to_bson(item) for item in obj]
	
	elif isinstance(obj, _primitives):
		return obj
	
	elif obj is None:
		return None

	else:
		raise TypeError(f"Type {type(obj)} not serializable.")
