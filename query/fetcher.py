"""
Page Fetcher

Runs the compiled page query against the word store and turns the rows into a
Page. One request issues one query on one scoped connection; pagination state
lives only in the caller's cursor.
"""

import asyncio
import logging
from typing import Optional

import asyncpg
from pydantic import ValidationError

from database import DatabaseNotConnectedError
from models import Page, WordRecord

from .builder import WordQueryBuilder
from .errors import FeatureUnavailableError, InvalidValueError, RowDecodeError, StoreUnavailableError
from .model import PageRequest

logger = logging.getLogger(__name__)


def split_sentinel(words: list, limit: int) -> tuple[list, bool]:
    """
    Apply the sentinel-row rule.
    The query asks for limit + 1 rows; receiving more than limit means more data exists.
    """
    if len(words) > limit:
        return words[:limit], True
    return words, False


class PageFetcher:
    """Fetches one page of words for a PageRequest."""

    def __init__(self, db, builder: Optional[WordQueryBuilder] = None, timeout: Optional[float] = None):
        self.db = db
        self.builder = builder or WordQueryBuilder()
        self.timeout = timeout

    def _decode(self, rows) -> list[WordRecord]:
        """Decode every row or none: a single bad row fails the page."""
        words = []
        for index, row in enumerate(rows):
            try:
                words.append(WordRecord.from_record(row))
            except (ValidationError, KeyError, TypeError) as e:
                logger.error(f"Failed to decode word row {index}: {e}")
                raise RowDecodeError(
                    f"Row {index} returned by the word store could not be decoded: {e}",
                    row=index,
                ) from e
        return words

    async def _run(self, sql: str, params: list, sampling: bool):
        if self.db is None or not getattr(self.db, "is_connected", True):
            raise StoreUnavailableError("Word store unavailable: database not connected")

        try:
            async with self.db.acquire() as conn:
                return await conn.fetch(sql, *params, timeout=self.timeout)
        except asyncpg.exceptions.UndefinedFunctionError as e:
            if sampling:
                raise FeatureUnavailableError(
                    f"Random sampling is not available: the word store has no "
                    f"'{self.builder.hash_function}' hash function ({e})",
                    feature="sampling",
                ) from e
            raise StoreUnavailableError(f"Word query failed: {e}") from e
        except asyncpg.exceptions.DataError as e:
            # The store rejected an argument value; retrying the same request cannot succeed
            raise InvalidValueError(f"Invalid query argument: {e}", path="request") from e
        except DatabaseNotConnectedError as e:
            raise StoreUnavailableError(f"Word store unavailable: {e}") from e
        except (asyncpg.PostgresError, asyncpg.InterfaceError) as e:
            raise StoreUnavailableError(f"Word query failed: {e}") from e
        except (OSError, asyncio.TimeoutError) as e:
            raise StoreUnavailableError(f"Word store unreachable: {e}") from e

    async def fetch_page(self, request: PageRequest) -> Page:
        """
        Fetch one page.

        Raises:
            UnknownFieldError / InvalidValueError: before any I/O, for identifiers off the allow-list;
                InvalidValueError also when the store rejects an argument value
            FeatureUnavailableError: sampling requested without a usable hash function
            StoreUnavailableError: connection or execution failure (retryable)
            RowDecodeError: a returned row does not match the word layout
        """
        sql, params = self.builder.build_page(request)

        rows = await self._run(sql, params, request.is_sampling)
        words = self._decode(rows)
        words, has_more = split_sentinel(words, request.limit)

        logger.info(f"Fetched {len(words)} word(s), hasMore={has_more}, startFrom={request.start_from!r}")
        return Page(words=words, has_more=has_more)
