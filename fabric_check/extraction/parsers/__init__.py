"""
Specialized parsers for page data.

Each parser handles one concern:
- composition: material composition (structured JSON or free text)
- size_table: structural search for the size list in a JSON tree
- stock: stock token normalization into SizeEntry values
"""

from .composition import parse_freetext_composition, parse_structured_composition
from .size_table import find_size_table, is_size_table
from .stock import OUT_OF_STOCK_TOKENS, is_in_stock, normalize_sizes

__all__ = [
    'parse_structured_composition',
    'parse_freetext_composition',
    'find_size_table',
    'is_size_table',
    'OUT_OF_STOCK_TOKENS',
    'is_in_stock',
    'normalize_sizes',
]
