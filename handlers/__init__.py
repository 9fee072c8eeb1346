"""
Handler Registry - Maps tool names to handler functions

Architecture:
- Each handler module exports async functions: handle_<tool_name>(db, arguments)
- Handlers that do not touch the word store take only (arguments)
- Registry maps tool names to (handler_function, needs_db) tuples

Usage:
    from handlers import get_handler

    handler_info = get_handler(tool_name)
    if handler_info:
        handler, needs_db = handler_info
        result = await handler(db, arguments) if needs_db else await handler(arguments)
"""

from typing import Callable, Optional, Tuple

from . import word_handlers


# Handler registry: {tool_name: (handler_function, needs_db)}
HANDLER_REGISTRY = {
    "get_words": (
        word_handlers.handle_get_words,
        True,  # needs_db
    ),
    "list_word_attributes": (
        word_handlers.handle_list_word_attributes,
        False,
    ),
}


def get_handler(tool_name: str) -> Optional[Tuple[Callable, bool]]:
    """
    Get handler function and its requirements for a tool.

    Returns:
        Tuple of (handler_function, needs_db) or None
    """
    return HANDLER_REGISTRY.get(tool_name)


def list_all_handlers() -> list[str]:
    """Get list of all registered tool names"""
    return list(HANDLER_REGISTRY.keys())


__all__ = [
    'get_handler',
    'list_all_handlers',
    'HANDLER_REGISTRY'
]
