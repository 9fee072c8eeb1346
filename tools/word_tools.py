"""
Word Lookup MCP Tools

Tool definitions for the word catalog. The get_words input schema is generated
from the attribute registry so every filter parameter stays in step with the
query builder.
"""

from mcp import types

from query.attributes import ATTRIBUTES, SORT_DIRECTIONS, WORD_LENGTH, get_sort_fields, range_param_names
from query.model import DEFAULT_LIMIT


def _range_properties() -> dict:
    """min<Name>/max<Name> integer properties for every attribute plus word length."""
    properties = {}
    for attribute in list(ATTRIBUTES.values()) + [WORD_LENGTH]:
        min_param, max_param = range_param_names(attribute)
        properties[min_param] = {
            "type": "integer",
            "minimum": attribute.min,
            "maximum": attribute.max,
            "description": f"Lowest {attribute.name} to include ({attribute.min}..{attribute.max}).",
        }
        properties[max_param] = {
            "type": "integer",
            "minimum": attribute.min,
            "maximum": attribute.max,
            "description": f"Highest {attribute.name} to include ({attribute.min}..{attribute.max}).",
        }
    return properties


def get_words() -> types.Tool:
    """
    Page through the word catalog with attribute range filters, a prefix
    filter, cursor pagination and optional seeded random sampling.
    """
    return types.Tool(
        name="get_words",
        description=(
            "Look up words from the catalog. Each word has integer scores: "
            f"{', '.join(ATTRIBUTES.keys())}. Sentiment ranges -5..5, the others 0..5.\n\n"
            "FILTERS: min<Name>/max<Name> per attribute (e.g. minCommonness=3), "
            "minLength/maxLength on word length, prefix on the word text. "
            "Out-of-range numbers are clamped to the attribute's range.\n\n"
            "PAGINATION: by default results are ordered by text; pass the returned nextStartFrom as "
            "startFrom to get the next page. hasMore tells whether another page exists. "
            "nextStartFrom is only returned for the default order (orderBy=text, orderDir=asc); "
            "with any other order it is null because the cursor always follows text order.\n\n"
            "SAMPLING: randomCount=N picks N pseudo-random matching words. Pass randomSeed "
            "to make the selection reproducible; the seed used is echoed in the response."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                **_range_properties(),
                "startFrom": {
                    "type": "string",
                    "description": "Return only words after this text (exclusive cursor). Default: from the beginning.",
                },
                "prefix": {
                    "type": "string",
                    "description": "Return only words starting with this text.",
                },
                "randomCount": {
                    "type": "integer",
                    "minimum": 0,
                    "description": "Sample this many matching words pseudo-randomly. Default: 0 (no sampling).",
                },
                "randomSeed": {
                    "type": "string",
                    "description": "Seed for reproducible sampling. Default: request time.",
                },
                "orderBy": {
                    "type": "string",
                    "enum": get_sort_fields(),
                    "description": "Field to order the page by. Default: text.",
                },
                "orderDir": {
                    "type": "string",
                    "enum": list(SORT_DIRECTIONS),
                    "description": "Sort direction. Default: asc.",
                },
                "limit": {
                    "type": "integer",
                    "minimum": 1,
                    "description": f"Page size. Default: {DEFAULT_LIMIT}.",
                },
            },
        },
    )


def list_word_attributes() -> types.Tool:
    """List the filterable attributes and their domains."""
    return types.Tool(
        name="list_word_attributes",
        description=(
            "List the word attributes that get_words can filter on, with their allowed "
            "ranges and parameter names, plus the fields get_words can order by."
        ),
        inputSchema={
            "type": "object",
            "properties": {},
        },
    )
