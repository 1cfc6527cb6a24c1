"""
Data models for material and stock extraction.

This module contains plain data classes with no extraction logic.
"""

from .product import (
    ExtractionResult,
    MaterialComposition,
    MaterialGroup,
    ProductReference,
    SiteVariant,
    SizeEntry,
)

__all__ = [
    'SiteVariant',
    'ProductReference',
    'MaterialGroup',
    'MaterialComposition',
    'SizeEntry',
    'ExtractionResult',
]
