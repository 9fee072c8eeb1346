"""
MCP Tools Package

- get_words: one page of filtered, cursor-paginated, optionally sampled words
- list_word_attributes: filterable attributes, their domains and sort fields
"""

from .word_tools import get_words, list_word_attributes


def get_core_tool_catalog():
    """Get all MCP tools exposed by the server."""
    return [
        get_words(),
        list_word_attributes(),
    ]


__all__ = [
    'get_core_tool_catalog',
    'get_words',
    'list_word_attributes',
]
