"""Document classes shared by the test suite."""

from dataclasses import dataclass, field
from datetime import datetime

from bson import ObjectId

from docmanager import AttributeBag, Document, TagList


@dataclass
class User(Document):
    __collection_name__ = "users"

    name: str


@dataclass
class Organization(Document):
    __collection_name__ = "organizations"
    __references__ = {"owner": User, "members": User}

    name: str
    type: str = "company"
    createdAt: datetime | None = None
    owner: ObjectId | User | None = None
    members: list = field(default_factory=list)
    attributes: AttributeBag = field(default_factory=AttributeBag)
    tags: TagList = field(default_factory=TagList)
