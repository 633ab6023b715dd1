import os

from pymongo import MongoClient
from pymongo.database import Database

# Module-level cache: (url, db name) -> database handle
_mongo_dbs: dict[tuple[str, str], Database] = {}

def create_mongo_db(url: str | None = None, db_name: str | None = None) -> Database:
    """ Returns the database handle, reusing one client per (url, db name).
    Arguments not given are read from the MONGO_URL and MONGO_DB_NAME environment variables. """
    url = url or os.environ.get("MONGO_URL")
    if not url: raise ValueError("Please set MONGO_URL in your environment variables.")

    db_name = db_name or os.environ.get("MONGO_DB_NAME")
    if not db_name: raise ValueError("Please set MONGO_DB_NAME in your environment variables.")

    if (url, db_name) not in _mongo_dbs:
        # Dates come back as UTC-aware datetimes
        mongo_client = MongoClient(url, tz_aware=True)
        _mongo_dbs[(url, db_name)] = mongo_client[db_name]
    return _mongo_dbs[(url, db_name)]

def reset_mongo_db() -> None:
    """ Drops the cached handles. The next create_mongo_db() reconnects. """
    _mongo_dbs.clear()
