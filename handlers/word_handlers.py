"""
Word Lookup Handlers

Handles the `get_words` and `list_word_attributes` tools.
Validates input, builds the page request, fetches the page, returns JSON.
The HTTP transport reuses run_words_query for GET /api/words.
"""

import json
import logging
from functools import lru_cache
from typing import Any, Mapping, Optional

from mcp import types

from config import WordsConfig
from models import WordAttribute
from query.attributes import ATTRIBUTES, WORD_LENGTH, get_sort_fields
from query.builder import WordQueryBuilder
from query.errors import StoreUnavailableError, WordQueryError
from query.fetcher import PageFetcher
from query.model import PageRequest
from query.validators import validate_page_params
from utils.error_messages import enhance_error_message

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_words_config() -> WordsConfig:
    """Query engine settings, read once from the environment."""
    return WordsConfig.from_environment()


def _text(payload: dict) -> list[types.TextContent]:
    return [types.TextContent(type="text", text=json.dumps(payload, indent=2))]


async def run_words_query(
    db,
    params: Optional[Mapping[str, Any]],
    config: Optional[WordsConfig] = None,
) -> tuple[dict, int]:
    """
    Run one page lookup from flat request parameters.

    Flow:
    1. Validate identifiers (orderBy, orderDir, min<Name>/max<Name>)
    2. Build the PageRequest (numeric input is clamped, never rejected)
    3. Fetch the page
    4. Build the response

    Returns (payload, http_status).
    """
    config = config or get_words_config()

    # 1. Validate
    validation_error = validate_page_params(params)
    if validation_error:
        return validation_error, 400

    # 2. Build request
    request = PageRequest.from_params(
        params,
        default_limit=config.default_limit,
        max_limit=config.max_limit,
    )

    # 3. Fetch
    fetcher = PageFetcher(
        db,
        WordQueryBuilder(hash_function=config.hash_function),
        timeout=config.query_timeout,
    )
    try:
        page = await fetcher.fetch_page(request)
    except WordQueryError as e:
        if isinstance(e, StoreUnavailableError) and e.__cause__ is not None:
            e.message = enhance_error_message(e.__cause__)
        logger.error(f"Word lookup failed ({e.code}): {e.message}")
        return e.to_dict(), e.http_status

    # 4. Build response
    words = [word.to_response() for word in page.words]
    # The cursor is text > startFrom; any other order has no resume point
    next_start_from = None
    if page.has_more and request.follows_cursor_order:
        next_start_from = words[-1]["text"]

    response = {
        "query": request.to_dict(),
        "count": len(words),
        "words": words,
        "hasMore": page.has_more,
        "nextStartFrom": next_start_from,
    }
    return response, 200


async def handle_get_words(db, arguments: dict[str, Any]) -> list[types.TextContent]:
    """Handle the `get_words` tool: one page of filtered words."""
    payload, _ = await run_words_query(db, arguments)
    return _text(payload)


def list_word_attributes() -> dict:
    """Describe every filterable attribute and the sortable fields."""
    attributes = [WordAttribute.from_definition(attr) for attr in ATTRIBUTES.values()]
    return {
        "attributes": [attr.model_dump(by_alias=True) for attr in attributes],
        "wordLength": WordAttribute.from_definition(WORD_LENGTH).model_dump(by_alias=True),
        "sortFields": get_sort_fields(),
        "samplingEnabled": get_words_config().sampling_enabled,
    }


async def handle_list_word_attributes(arguments: dict[str, Any]) -> list[types.TextContent]:
    """Handle the `list_word_attributes` tool."""
    return _text(list_word_attributes())
