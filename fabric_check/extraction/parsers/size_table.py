"""
Size-Table Locator

Finds the list of per-size stock entries somewhere inside a decoded
JSON document. Its location differs between page template versions, so
the search walks the whole tree instead of following a fixed path.
"""

from typing import Any, List, Optional

NAME_FIELD = "name"
STOCK_FIELD = "stock"
ITEMS_FIELD = "items"

MAX_DEPTH = 64


def is_size_table(value: Any) -> bool:
    """
    Check whether a value looks like a size table.

    A size table is a non-empty list whose first element is an object
    with a non-empty name and a non-empty stock value.
    """
    if not isinstance(value, list) or not value:
        return False
    first = value[0]
    return isinstance(first, dict) and bool(first.get(NAME_FIELD)) and bool(first.get(STOCK_FIELD))


def find_size_table(value: Any, max_depth: int = MAX_DEPTH) -> Optional[List[Any]]:
    """
    Depth-first search for the first size table in a JSON tree.

    Lists are searched element by element, objects field by field in
    insertion order. An object's "items" field is checked before its other
    fields. Branches nested deeper than max_depth are skipped.

    Args:
        value: Decoded JSON value (dict, list or scalar)
        max_depth: Maximum nesting depth to explore

    Returns:
        The matching list, or None if the tree has no size table
    """
    return _search(value, 0, max_depth)


def _search(value: Any, depth: int, max_depth: int) -> Optional[List[Any]]:
    if depth > max_depth:
        return None

    if isinstance(value, list):
        if is_size_table(value):
            return value
        for element in value:
            found = _search(element, depth + 1, max_depth)
            if found is not None:
                return found
        return None

    if isinstance(value, dict):
        items = value.get(ITEMS_FIELD)
        if is_size_table(items):
            return items
        for child in value.values():
            found = _search(child, depth + 1, max_depth)
            if found is not None:
                return found
        return None

    # Scalars
    return None
