"""
Input Validators

Validates page-request parameters that name identifiers (sort field, sort
direction, filter attributes) and returns helpful error messages with the
valid choices. Numeric values are not validated here; the request model
repairs them.
"""

import re
from typing import Any, Mapping, Optional

from .attributes import ATTRIBUTES, SORT_DIRECTIONS, WORD_LENGTH, get_attribute_names, get_sort_fields, range_param_names

# min<Name> / max<Name> parameters address a filter attribute
_RANGE_PARAM_RE = re.compile(r"^(min|max)([A-Z][A-Za-z0-9]*)$")

_KNOWN_RANGE_PARAMS = {
    param
    for attribute in list(ATTRIBUTES.values()) + [WORD_LENGTH]
    for param in range_param_names(attribute)
}


def _error(code: str, path: str, message: str, **extra) -> dict:
    """Build a structured validation error."""
    err = {"code": code, "path": path, "message": message}
    err.update(extra)
    return err


def validate_page_params(params: Optional[Mapping[str, Any]]) -> Optional[dict]:
    """
    Validate input for a words page lookup.
    Returns error dict if invalid, None if valid.
    """
    errors = []
    params = params or {}

    # Filter field validation
    for key in params:
        match = _RANGE_PARAM_RE.match(key)
        if match and key not in _KNOWN_RANGE_PARAMS:
            name = match.group(2)[0].lower() + match.group(2)[1:]
            errors.append(_error(
                "UNKNOWN_FIELD", key,
                f"Cannot filter on unknown field '{name}'",
                validFields=get_attribute_names() + [WORD_LENGTH.name],
            ))

    # OrderBy validation
    order_by = params.get("orderBy")
    if order_by is not None and order_by != "" and order_by not in get_sort_fields():
        errors.append(_error(
            "UNKNOWN_FIELD", "orderBy",
            f"Cannot order by unknown field '{order_by}'",
            validFields=get_sort_fields(),
        ))

    # OrderDir validation
    order_dir = params.get("orderDir")
    if order_dir is not None and order_dir != "" and str(order_dir).lower() not in SORT_DIRECTIONS:
        errors.append(_error(
            "INVALID_VALUE", "orderDir",
            f"Invalid sort direction '{order_dir}'",
            validValues=list(SORT_DIRECTIONS),
        ))

    if errors:
        return {"error": True, "code": "VALIDATION_ERROR", "errors": errors}

    return None
