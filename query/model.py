"""
Page Request Model

In-memory representation of one page lookup over the word catalog. Numeric
input is repaired, never rejected: malformed or out-of-domain bounds fall back
to the attribute's domain edges.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .attributes import ATTRIBUTES, TEXT_COLUMN, WORD_LENGTH, AttributeDef, range_param_names

DEFAULT_LIMIT = 100
MAX_LIMIT = 1000


def parse_int(value: Any) -> Optional[int]:
    """
    Leniently read an integer from transport input.
    Returns None for anything that is not an integer or an integer string.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _as_text(value: Any) -> Optional[str]:
    """Transport value as text; NUL characters are dropped (PostgreSQL text cannot hold them)."""
    if value is None:
        return None
    text = value if isinstance(value, str) else str(value)
    return text.replace("\x00", "")


@dataclass(frozen=True)
class RangeFilter:
    """Inclusive [min, max] bound over one attribute."""
    min: int
    max: int

    @classmethod
    def full(cls, attribute: AttributeDef) -> "RangeFilter":
        return cls(attribute.min, attribute.max)

    @classmethod
    def clamped(cls, attribute: AttributeDef, min_value: Any = None, max_value: Any = None) -> "RangeFilter":
        """
        Build a filter from untrusted bounds.
        - Absent, unparsable or out-of-domain min -> domain min
        - Absent, unparsable or out-of-domain max -> domain max
        - min > max after repair -> full domain
        """
        low = parse_int(min_value)
        high = parse_int(max_value)

        if low is None or not attribute.contains(low):
            low = attribute.min
        if high is None or not attribute.contains(high):
            high = attribute.max

        if low > high:
            return cls.full(attribute)
        return cls(low, high)

    def is_default(self, attribute: AttributeDef) -> bool:
        return self.min == attribute.min and self.max == attribute.max

    def has_min(self, attribute: AttributeDef) -> bool:
        return self.min != attribute.min

    def has_max(self, attribute: AttributeDef) -> bool:
        return self.max != attribute.max

    def to_dict(self) -> dict:
        return {"min": self.min, "max": self.max}


@dataclass
class PageRequest:
    """One page of a filtered, optionally sampled, word lookup."""
    ranges: dict[str, RangeFilter] = field(default_factory=dict)
    word_length: RangeFilter = field(default_factory=lambda: RangeFilter.full(WORD_LENGTH))
    start_from: str = ""
    prefix: Optional[str] = None
    random_count: int = 0
    random_seed: Optional[str] = None
    sort_field: str = "text"
    sort_direction: str = "asc"
    limit: int = DEFAULT_LIMIT

    def __post_init__(self):
        if self.limit < 1:
            self.limit = DEFAULT_LIMIT
        if self.random_count < 0:
            self.random_count = 0
        self.sort_direction = self.sort_direction.lower()

    @property
    def is_sampling(self) -> bool:
        return self.random_count > 0

    @property
    def follows_cursor_order(self) -> bool:
        """
        True when the page is ordered by text ascending, the same order as the
        cursor predicate (text > startFrom). Only then does the last word of a
        page resume the walk without gaps or repeats.
        """
        return self.sort_field == TEXT_COLUMN and self.sort_direction == "asc"

    @classmethod
    def from_params(
        cls,
        params: Optional[Mapping[str, Any]],
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_LIMIT,
        now: Optional[float] = None,
    ) -> "PageRequest":
        """
        Build a request from flat transport parameters (query string or tool arguments).

        Recognized keys: min<Name>/max<Name> per attribute, minLength/maxLength,
        startFrom, prefix, randomCount, randomSeed, orderBy, orderDir, limit.
        Identifier values (orderBy, orderDir) are copied as given; they are
        checked by the validators and again by the query builder.
        """
        params = params or {}

        ranges = {}
        for name, attribute in ATTRIBUTES.items():
            min_key, max_key = range_param_names(attribute)
            range_filter = RangeFilter.clamped(attribute, params.get(min_key), params.get(max_key))
            if not range_filter.is_default(attribute):
                ranges[name] = range_filter

        min_key, max_key = range_param_names(WORD_LENGTH)
        word_length = RangeFilter.clamped(WORD_LENGTH, params.get(min_key), params.get(max_key))

        limit = parse_int(params.get("limit"))
        if limit is None or limit < 1:
            limit = default_limit
        limit = min(limit, max_limit)

        random_count = parse_int(params.get("randomCount"))
        if random_count is None or random_count < 0:
            random_count = 0
        random_count = min(random_count, max_limit)

        random_seed = _as_text(params.get("randomSeed"))
        if random_count > 0 and not random_seed:
            # Unpinned seeds make sampling non-reproducible across requests
            arrival = now if now is not None else time.time()
            random_seed = str(int(arrival))

        return cls(
            ranges=ranges,
            word_length=word_length,
            start_from=_as_text(params.get("startFrom")) or "",
            prefix=_as_text(params.get("prefix")) or None,
            random_count=random_count,
            random_seed=random_seed if random_count > 0 else None,
            sort_field=_as_text(params.get("orderBy")) or "text",
            sort_direction=_as_text(params.get("orderDir")) or "asc",
            limit=limit,
        )

    def to_dict(self) -> dict:
        """Effective request, echoed back alongside the page."""
        return {
            "filters": {name: rng.to_dict() for name, rng in self.ranges.items()},
            "wordLength": self.word_length.to_dict(),
            "startFrom": self.start_from,
            "prefix": self.prefix,
            "randomCount": self.random_count,
            "randomSeed": self.random_seed,
            "orderBy": self.sort_field,
            "orderDir": self.sort_direction,
            "limit": self.limit,
        }
