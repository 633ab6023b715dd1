from .page import Page
from .paginator import Paginator, QueryPaginator
