"""
Word Attribute Registry

Maps public attribute names to word-store columns and declares the inclusive
integer domain of every score. The registry order is the order used for the
projection and for emitting range predicates.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AttributeDef:
    """A tracked word attribute."""
    name: str  # Public name used in requests and responses
    column: str  # Column (or SQL expression) in the words table
    min: int
    max: int
    field: str = ""  # WordRecord field name, defaults to the public name

    @property
    def field_name(self) -> str:
        return self.field or self.name

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max


WORDS_TABLE = "words"
TEXT_COLUMN = "text"


# =============================================================================
# Attribute Registry
# =============================================================================

ATTRIBUTES: dict[str, AttributeDef] = {
    "commonness": AttributeDef(name="commonness", column="commonness", min=0, max=5),
    "offensiveness": AttributeDef(name="offensiveness", column="offensiveness", min=0, max=5),
    "sentiment": AttributeDef(name="sentiment", column="sentiment", min=-5, max=5),
    "formality": AttributeDef(name="formality", column="formality", min=0, max=5),
    "culturalSensitivity": AttributeDef(
        name="culturalSensitivity",
        column="culturalsensitivity",
        min=0,
        max=5,
        field="cultural_sensitivity",
    ),
    "figurativeness": AttributeDef(name="figurativeness", column="figurativeness", min=0, max=5),
    "complexity": AttributeDef(name="complexity", column="complexity", min=0, max=5),
    "political": AttributeDef(name="political", column="political", min=0, max=5),
}

# Derived attribute, not stored
WORD_LENGTH = AttributeDef(name="length", column="LENGTH(text)", min=0, max=255)

# Fields that may appear in ORDER BY, mapped to their SQL expression
SORT_FIELDS: dict[str, str] = {
    "text": TEXT_COLUMN,
    WORD_LENGTH.name: WORD_LENGTH.column,
    **{name: attr.column for name, attr in ATTRIBUTES.items()},
}

SORT_DIRECTIONS = ("asc", "desc")

PROJECTION: tuple[str, ...] = (TEXT_COLUMN,) + tuple(attr.column for attr in ATTRIBUTES.values())


def get_attribute(name: str) -> Optional[AttributeDef]:
    """Look up a stored attribute by its public name."""
    return ATTRIBUTES.get(name)


def get_attribute_names() -> list[str]:
    return list(ATTRIBUTES.keys())


def get_sort_fields() -> list[str]:
    return list(SORT_FIELDS.keys())


def range_param_names(attribute: AttributeDef) -> tuple[str, str]:
    """Transport parameter names for an attribute's bounds, e.g. minCommonness/maxCommonness."""
    suffix = attribute.name[0].upper() + attribute.name[1:]
    return f"min{suffix}", f"max{suffix}"
