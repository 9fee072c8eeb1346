"""
Word Query Engine

Compiles filtered, cursor-paginated and optionally sampled word lookups into a
single parameterized query. The page fetcher (query.fetcher) runs it and
turns the result rows into a page.
"""

from .attributes import ATTRIBUTES, WORD_LENGTH, SORT_FIELDS, get_attribute
from .model import PageRequest, RangeFilter
from .builder import SqlBuilder, WordQueryBuilder
from .errors import (
    WordQueryError,
    UnknownFieldError,
    InvalidValueError,
    StoreUnavailableError,
    RowDecodeError,
    FeatureUnavailableError,
)
from .validators import validate_page_params

__all__ = [
    'ATTRIBUTES',
    'WORD_LENGTH',
    'SORT_FIELDS',
    'get_attribute',
    'PageRequest',
    'RangeFilter',
    'SqlBuilder',
    'WordQueryBuilder',
    'WordQueryError',
    'UnknownFieldError',
    'InvalidValueError',
    'StoreUnavailableError',
    'RowDecodeError',
    'FeatureUnavailableError',
    'validate_page_params',
]
