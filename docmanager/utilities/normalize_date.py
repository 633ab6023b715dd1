import re
from datetime import datetime, timezone

from .invalid_date import INVALID_DATE, InvalidDate


_FRACTIONAL_SECONDS = re.compile(r"\.[0-9]+")

def normalize_date(value: datetime | str | None) -> datetime | InvalidDate:
	""" Normalize an ISO-8601 value into a datetime. Datetimes are returned unchanged.
	Fractional seconds are stripped before parsing, so "2021-05-01T10:00:00.123Z" and "2021-05-01T10:00:00Z" give the same instant.
	Strings must include a UTC offset ("Z", "+02:00"). Returns INVALID_DATE (falsy) rather than raising when the value can't be parsed. """
	if isinstance(value, datetime):
		return value
	if not isinstance(value, str):
		return INVALID_DATE
	
	stripped = _FRACTIONAL_SECONDS.sub("", value.strip())
	try:
		date = datetime.fromisoformat(stripped)
	except ValueError:
		return INVALID_DATE
	if date.tzinfo is None:
		return INVALID_DATE
	return date

def normalize_date_to_mongo(value: datetime | str | None) -> datetime | InvalidDate:
	""" Same parsing as normalize_date(), converted to the representation BSON stores: a UTC datetime at whole-second precision.
	NOTE: Sub-second precision is lost here, even for datetime inputs. Naive datetimes are treated as UTC. """
	date = normalize_date(value)
	if isinstance(date, InvalidDate):
		return INVALID_DATE
	
	if date.tzinfo is None:
		date = date.replace(tzinfo=timezone.utc)
	return datetime.fromtimestamp(int(date.timestamp()), tz=timezone.utc)
