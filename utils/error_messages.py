"""
Error Message Utilities

Provides human-readable messages for word store failures that reach the
caller as raw driver text.
"""

import re
from typing import Optional

# Human-readable hints for well-known store failures
STORE_HINTS = {
    "missing_table": (
        "The words table does not exist. Initialize the store with "
        "'python utils/init_db.py init'."
    ),
    "connection_refused": (
        "The word store refused the connection. Check DB_HOST/DB_PORT and that PostgreSQL is running."
    ),
    "auth_failed": "The word store rejected the credentials. Check DB_USER/DB_PASSWORD.",
}


def enhance_error_message(error: Exception) -> str:
    """
    Enhance word store error messages with human-readable explanations.

    Handles:
    - Missing hash function used for sampling
    - Missing words table
    - Connection and authentication failures
    - Check constraint violations on attribute scores

    Returns the enhanced error message string.
    """
    error_str = str(error)

    fn_match = re.search(r'function (\w+)\((.*?)\) does not exist', error_str)
    if fn_match:
        return (
            f"Store function '{fn_match.group(1)}' is missing, so random sampling is unavailable. "
            f"Install it from schema.sql or set WORDS_HASH_FUNCTION to a function the store provides."
        )

    if re.search(r'relation "(\w+\.)?words" does not exist', error_str):
        return STORE_HINTS["missing_table"]

    if re.search(r'connection refused|Connect call failed', error_str, re.IGNORECASE):
        return f"{STORE_HINTS['connection_refused']} ({error_str})"

    if re.search(r'password authentication failed', error_str):
        return STORE_HINTS["auth_failed"]

    constraint_match = re.search(r'violates check constraint "(\w+)"', error_str)
    if constraint_match:
        constraint_name = constraint_match.group(1)
        attribute = get_constraint_attribute(constraint_name)
        if attribute:
            return f"Constraint violation ({constraint_name}): '{attribute}' is outside its allowed range."
        return f"Constraint violation: {constraint_name}. {error_str}"

    unique_match = re.search(r'duplicate key value violates unique constraint "(\w+)"', error_str)
    if unique_match:
        return f"Duplicate entry: a word with this text already exists ({unique_match.group(1)})."

    return error_str


def get_constraint_attribute(constraint_name: str) -> Optional[str]:
    """Map a words_<column>_range check constraint back to its column."""
    match = re.match(r'^words_(\w+)_range$', constraint_name)
    return match.group(1) if match else None
