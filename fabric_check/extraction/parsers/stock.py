"""
Stock Normalizer

Maps raw size entries with site-specific stock tokens to SizeEntry values.
"""

from typing import Any, Iterable, List

from ...models import SizeEntry
from .size_table import NAME_FIELD, STOCK_FIELD

# Exact, case-sensitive tokens meaning "sold out". Anything else is in stock.
OUT_OF_STOCK_TOKENS = frozenset({"no", "out_of_stock", "oos"})


def is_in_stock(token: Any) -> bool:
    """Return False only for the known out-of-stock tokens."""
    return not (isinstance(token, str) and token in OUT_OF_STOCK_TOKENS)


def normalize_sizes(items: Iterable[Any]) -> List[SizeEntry]:
    """
    Convert raw size items to SizeEntry values.

    Items without a name or stock value are dropped, not defaulted.
    Source order and duplicates are preserved.

    Args:
        items: Raw size objects, e.g. [{"name": "M", "stock": "yes"}, ...]

    Returns:
        List of SizeEntry
    """
    sizes = []
    for item in items:
        if not isinstance(item, dict):
            continue
        name = item.get(NAME_FIELD)
        stock = item.get(STOCK_FIELD)
        if not name or not stock:
            continue
        sizes.append(SizeEntry(name=str(name), in_stock=is_in_stock(stock)))
    return sizes
