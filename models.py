"""
Data models for the word catalog
Using Pydantic for validation and serialization

Score bounds mirror the attribute registry in query/attributes.py; a row that
violates them fails validation instead of being returned.
"""

from typing import Any, List, Mapping

from pydantic import BaseModel, ConfigDict, Field

from query.attributes import ATTRIBUTES, TEXT_COLUMN, AttributeDef, range_param_names


class WordRecord(BaseModel):
    """One catalog entry with its integer attribute scores"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    text: str = Field(..., min_length=1)
    commonness: int = Field(..., ge=0, le=5)
    offensiveness: int = Field(..., ge=0, le=5)
    sentiment: int = Field(..., ge=-5, le=5)
    formality: int = Field(..., ge=0, le=5)
    cultural_sensitivity: int = Field(..., ge=0, le=5, alias="culturalSensitivity")
    figurativeness: int = Field(..., ge=0, le=5)
    complexity: int = Field(..., ge=0, le=5)
    political: int = Field(..., ge=0, le=5)

    @classmethod
    def from_record(cls, row: Mapping[str, Any]) -> "WordRecord":
        """Build from a store row keyed by column name (asyncpg.Record or dict)."""
        values = {attr.field_name: row[attr.column] for attr in ATTRIBUTES.values()}
        return cls.model_validate({"text": row[TEXT_COLUMN], **values}, strict=True)

    def to_response(self) -> dict:
        return self.model_dump(by_alias=True)


class Page(BaseModel):
    """Result of one page lookup"""
    model_config = ConfigDict(populate_by_name=True)

    words: List[WordRecord] = Field(default_factory=list)
    has_more: bool = Field(False, alias="hasMore")


class WordAttribute(BaseModel):
    """Public description of a filterable attribute"""
    name: str
    min: int
    max: int
    min_param: str = Field(..., alias="minParam")
    max_param: str = Field(..., alias="maxParam")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_definition(cls, attribute: AttributeDef) -> "WordAttribute":
        min_param, max_param = range_param_names(attribute)
        return cls(
            name=attribute.name,
            min=attribute.min,
            max=attribute.max,
            min_param=min_param,
            max_param=max_param,
        )
