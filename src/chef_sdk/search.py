"""
Client-side sorting of Chef search results

The search endpoint returns ``{"rows": [...], "total": N, "start": M}``
and cannot sort by an arbitrary attribute, so rows are ordered locally by
the first occurrence of a key anywhere inside each row.
"""

import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

_MISSING = object()

# Sort groups: numbers, then strings, then other JSON values, then rows without the key
_RANK_NUMBER = 0
_RANK_STRING = 1
_RANK_OTHER = 2
_RANK_MISSING = 3


def _find(document: Any, key: str) -> Any:
    if isinstance(document, Mapping):
        for name, value in document.items():
            if name == key:
                return value
            found = _find(value, key)
            if found is not _MISSING:
                return found
    elif isinstance(document, Sequence) and not isinstance(document, (str, bytes)):
        for item in document:
            found = _find(item, key)
            if found is not _MISSING:
                return found

    return _MISSING


def find_key(document: Any, key: str) -> Optional[Any]:
    """
    Depth-first search for the first value stored under ``key``.

    Entries are visited in document order. Each entry's key is compared
    first, then its value is descended into before the next sibling is
    looked at, so a match nested under an earlier entry wins over a later
    sibling with the same key.

    Args:
        document: Decoded JSON document
        key: Key name to look for

    Returns:
        The first matching value, or None if the key does not occur
    """
    found = _find(document, key)
    return None if found is _MISSING else found


def sort_key(value: Any) -> Tuple[int, Any]:
    """
    Build a total-order key for an extracted sort value.

    Args:
        value: Value returned by find_key

    Returns:
        tuple: (group rank, comparable value)
    """
    if value is None:
        return (_RANK_MISSING, 0)
    if isinstance(value, (int, float)):
        return (_RANK_NUMBER, value)
    if isinstance(value, str):
        return (_RANK_STRING, value)
    return (_RANK_OTHER, json.dumps(value, sort_keys=True, default=str))


def sort_rows(rows: List[Any], sort_by: str) -> None:
    """Stable in-place sort of search rows by a nested key."""
    keys = [sort_key(find_key(row, sort_by)) for row in rows]
    order = sorted(range(len(rows)), key=keys.__getitem__)
    rows[:] = [rows[i] for i in order]


def sort_search_result(result: Optional[Dict[str, Any]], sort_by: str) -> Optional[Dict[str, Any]]:
    """
    Sort a search result's rows in place.

    Rows whose key is missing (or null) go last in their original relative
    order. Fields other than ``rows`` are left untouched.

    Args:
        result: Decoded search response
        sort_by: Key name to sort by

    Returns:
        The same result object
    """
    if not sort_by:
        return result

    if not isinstance(result, dict) or not isinstance(result.get('rows'), list):
        logger.debug(f"Search result has no rows to sort by '{sort_by}'")
        return result

    sort_rows(result['rows'], sort_by)
    return result
