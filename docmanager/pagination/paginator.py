from typing import Protocol, runtime_checkable

from .page import Page

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from ..query.document_query import DocumentQuery


@runtime_checkable
class Paginator(Protocol):
    def paginate(self, query: 'DocumentQuery', page: int, items_per_page: int) -> Page: ...

class QueryPaginator:
    """ Counts the full result, then fetches one window of it with skip/limit. """

    def paginate(self, query: 'DocumentQuery', page: int, items_per_page: int) -> Page:
        if page < 1:
            raise ValueError(f"page must be >= 1. Got {page}.")
        if items_per_page < 1:
            raise ValueError(f"items_per_page must be > 0. Got {items_per_page}.")

        total_count = query.count()
        skip = (page - 1) * items_per_page
        items = query.execute(skip=skip, limit=items_per_page) if skip < total_count else []
        return Page(items=items, page=page, items_per_page=items_per_page, total_count=total_count)
