from .filter_clause import FilterClause, FilterOperator, parse_filters, apply_filters
from .sort_direction import SortDirection
from .free_text_query import FreeTextQuery
from .field_name import dashes_to_camel_case
from .document_query import DocumentQuery, FieldExpression
from .aggregation_pipeline import AggregationSpec, group_count_expression
