"""
Extractor registry.

Maps each supported site family to the extractor class that handles it.
"""

from typing import Optional, Type

from ..models import SiteVariant
from .base import BaseExtractor
from .next_data_extractor import NextDataExtractor
from .stock_api_extractor import StockApiExtractor

SITE_EXTRACTORS = {
    SiteVariant.COS: NextDataExtractor,
    SiteVariant.ARKET: NextDataExtractor,
    SiteVariant.PEEK: StockApiExtractor,
}


def get_extractor_for_variant(variant: SiteVariant) -> Optional[Type[BaseExtractor]]:
    """
    Get the extractor class for a site family.

    Args:
        variant: Detected site family

    Returns:
        Extractor class, or None for unsupported sites
    """
    return SITE_EXTRACTORS.get(variant)
