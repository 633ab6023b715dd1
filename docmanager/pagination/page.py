from dataclasses import dataclass
import math
from typing import Any, Callable, Generic, Iterator, TypeVar


T = TypeVar('T')

@dataclass(frozen=True)
class Page(Generic[T]):
    """ One page of a listing, with the metadata needed to render pagination. """
    items: list[T]
    page: int
    items_per_page: int
    total_count: int

    @property
    def page_count(self) -> int:
        if self.total_count <= 0:
            return 0
        return math.ceil(self.total_count / self.items_per_page)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def to_dict(self, serializer: Callable[[T], Any] | None = None) -> dict[str, Any]:
        """ JSON-ready shape: { items: [...], metadata: { page, itemsPerPage, totalCount, pageCount } } """
        items = [serializer(item) for item in self.items] if serializer else list(self.items)
        return {
            "items": items,
            "metadata": {
                "page": self.page,
                "itemsPerPage": self.items_per_page,
                "totalCount": self.total_count,
                "pageCount": self.page_count,
            }
        }
