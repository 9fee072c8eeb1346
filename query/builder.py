"""
Query Builder

Translates a PageRequest into one parameterized SQL statement.
All values are passed as asyncpg positional parameters ($1, $2, ...), never interpolated.
Identifiers that reach the SQL text (sort field, filter columns, hash function)
come only from the attribute registry or from validated configuration.

Supports:
- Range filters on every tracked attribute, in registry order
- Word length bounds over LENGTH(text)
- Prefix filter (LIKE metacharacters escaped)
- Cursor pagination on text with a sentinel row (LIMIT limit + 1)
- Seeded pseudo-random sampling via a store-side 64-bit hash
"""

import logging
import re
import time
from typing import Any, Optional

from .attributes import (
    ATTRIBUTES,
    PROJECTION,
    SORT_DIRECTIONS,
    SORT_FIELDS,
    TEXT_COLUMN,
    WORD_LENGTH,
    WORDS_TABLE,
    AttributeDef,
    get_attribute_names,
    get_sort_fields,
)
from .errors import FeatureUnavailableError, InvalidValueError, UnknownFieldError
from .model import PageRequest, RangeFilter

logger = logging.getLogger(__name__)

DEFAULT_HASH_FUNCTION = "fnv64"

# Plain or schema-qualified SQL identifier
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


def is_sql_identifier(name: str) -> bool:
    return bool(name) and bool(_IDENTIFIER_RE.match(name))


def escape_like(value: str) -> str:
    """Escape LIKE metacharacters so the value matches literally (ESCAPE '\\')."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SqlBuilder:
    """
    Accumulates SQL fragments together with their values.

    Each fragment marks its value slots with '?'. A fragment and its values are
    appended atomically, and placeholders are numbered only once, in render(),
    so a clause that is never appended cannot reserve or skip an index.
    """

    MARKER = "?"

    def __init__(self):
        self._fragments: list[tuple[str, tuple]] = []

    def append(self, fragment: str, *values: Any) -> "SqlBuilder":
        markers = fragment.count(self.MARKER)
        if markers != len(values):
            raise ValueError(
                f"Fragment has {markers} placeholder(s) but {len(values)} value(s): {fragment!r}"
            )
        self._fragments.append((fragment, values))
        return self

    def render(self) -> tuple[str, list]:
        """Returns (sql, params) with placeholders numbered $1..$n in append order."""
        params: list = []
        parts = []
        for fragment, values in self._fragments:
            pieces = fragment.split(self.MARKER)
            text = pieces[0]
            for value, piece in zip(values, pieces[1:]):
                params.append(value)
                text += f"${len(params)}{piece}"
            parts.append(text)

        sql = " ".join(parts)
        return " ".join(sql.split()), params  # Normalize whitespace


class WordQueryBuilder:
    """Builds the page query for the words table."""

    def __init__(self, hash_function: Optional[str] = DEFAULT_HASH_FUNCTION, table: str = WORDS_TABLE):
        if hash_function and not is_sql_identifier(hash_function):
            raise ValueError(f"Invalid hash function name: {hash_function!r}")
        if not is_sql_identifier(table):
            raise ValueError(f"Invalid table name: {table!r}")
        self.hash_function = hash_function or None
        self.table = table

    @property
    def supports_sampling(self) -> bool:
        return self.hash_function is not None

    def _resolve_order(self, request: PageRequest) -> str:
        """Build the outer ORDER BY clause from the allow-listed sort field."""
        sort_expr = SORT_FIELDS.get(request.sort_field)
        if sort_expr is None:
            raise UnknownFieldError(request.sort_field, get_sort_fields(), path="orderBy")

        if request.sort_direction not in SORT_DIRECTIONS:
            raise InvalidValueError(
                f"Invalid sort direction '{request.sort_direction}', expected one of {list(SORT_DIRECTIONS)}",
                path="orderDir",
            )

        order = f"ORDER BY {sort_expr} {request.sort_direction.upper()}"
        if sort_expr != TEXT_COLUMN:
            # text is unique, so ties on the sort field still have a stable order
            order += f", {TEXT_COLUMN} ASC"
        return order

    def _active_ranges(self, request: PageRequest) -> list[tuple[AttributeDef, RangeFilter]]:
        """Non-default range filters in registry order."""
        for name in request.ranges:
            if name not in ATTRIBUTES:
                raise UnknownFieldError(name, get_attribute_names(), path=f"filters.{name}")

        active = []
        for name, attribute in ATTRIBUTES.items():
            range_filter = request.ranges.get(name)
            if range_filter is not None and not range_filter.is_default(attribute):
                active.append((attribute, range_filter))
        return active

    def build_page(self, request: PageRequest) -> tuple[str, list]:
        """
        Build the SELECT for one page.
        Returns (sql, params).

        Clause order (and therefore parameter order):
        cursor, attribute ranges, length min, length max, prefix,
        [seed, sample size], limit + 1.
        """
        order_clause = self._resolve_order(request)
        ranges = self._active_ranges(request)

        if request.is_sampling and not self.supports_sampling:
            raise FeatureUnavailableError(
                "Random sampling is not available: no hash function is configured for the word store",
                feature="sampling",
            )

        columns = ", ".join(PROJECTION)
        sql = SqlBuilder()

        if request.is_sampling:
            sql.append(f"SELECT {columns} FROM (")

        sql.append(f"SELECT {columns} FROM {self.table} WHERE {TEXT_COLUMN} > ?", request.start_from)

        for attribute, range_filter in ranges:
            sql.append(
                f"AND {attribute.column} >= ? AND {attribute.column} <= ?",
                range_filter.min,
                range_filter.max,
            )

        if request.word_length.has_min(WORD_LENGTH):
            sql.append(f"AND {WORD_LENGTH.column} >= ?", request.word_length.min)
        if request.word_length.has_max(WORD_LENGTH):
            sql.append(f"AND {WORD_LENGTH.column} <= ?", request.word_length.max)

        if request.prefix:
            sql.append(f"AND {TEXT_COLUMN} LIKE ? ESCAPE '\\'", escape_like(request.prefix) + "%")

        if request.is_sampling:
            seed = request.random_seed or str(int(time.time()))
            sql.append(
                f"ORDER BY {self.hash_function}(CONCAT(CAST(? AS TEXT), {TEXT_COLUMN})) LIMIT ?) AS sample",
                seed,
                request.random_count,
            )

        # Sentinel row: one extra row signals that more data exists
        sql.append(f"{order_clause} LIMIT ?", request.limit + 1)

        query, params = sql.render()
        logger.debug(f"Generated page query: {query} -- params: {params}")
        return query, params
