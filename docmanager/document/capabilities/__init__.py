"""
Capabilities are small value objects a Document can embed as a field, e.g.

    @dataclass
    class Organization(Document):
        __collection_name__ = "organizations"
        name: str
        attributes: AttributeBag = field(default_factory=AttributeBag)
        tags: TagList = field(default_factory=TagList)

Each one implements to_bson() and a from_bson() classmethod, which is all Document needs to store and load it.
"""

from .attribute_bag import AttributeBag
from .tag_list import TagList
