"""
Material and stock extraction for fashion retailer product pages.

Modules:
    orchestrator - extract_product entry points (URL in, ExtractionResult out)
    site_detector - detect_site for URL classification
    registry - site family to extractor mapping
    next_data_extractor - NextDataExtractor for COS and Arket
    stock_api_extractor - StockApiExtractor for Peek & Cloppenburg
    errors - ExtractionError and fatal error messages
    parsers - Composition, size-table and stock parsers
"""

from .base import BaseExtractor
from .errors import ExtractionError
from .next_data_extractor import NextDataExtractor
from .orchestrator import (
    extract_product,
    extract_product_cached,
    extract_product_from_html,
)
from .registry import SITE_EXTRACTORS, get_extractor_for_variant
from .site_detector import detect_site
from .stock_api_extractor import StockApiExtractor

__all__ = [
    # Entry points
    'extract_product',
    'extract_product_cached',
    'extract_product_from_html',
    # Site handling
    'detect_site',
    'get_extractor_for_variant',
    'SITE_EXTRACTORS',
    # Extractors
    'BaseExtractor',
    'NextDataExtractor',
    'StockApiExtractor',
    'ExtractionError',
]
