"""
Site Detector

Classifies a product URL into a retailer family by its hostname.
"""

import logging
from typing import Optional, Sequence, Tuple
from urllib.parse import urlparse

from ..common.config_loader import CONFIG_ERRORS, load_site_patterns
from ..models import SiteVariant

logger = logging.getLogger(__name__)

_default_patterns = None


def _get_default_patterns():
    """Configured patterns; empty (and retried next call) when the config cannot be read."""
    global _default_patterns
    if _default_patterns is None:
        try:
            _default_patterns = load_site_patterns()
        except CONFIG_ERRORS as e:
            logger.error("Could not load site patterns: %s", e)
            return []
    return _default_patterns


def detect_site(url: str, patterns: Optional[Sequence[Tuple[SiteVariant, str]]] = None) -> SiteVariant:
    """
    Get the retailer family for a URL.

    Args:
        url: Product URL
        patterns: Ordered (variant, hostname substring) pairs; first match
            wins. Defaults to the hosts declared in config/sites.yaml.

    Returns:
        Matching SiteVariant, or SiteVariant.UNKNOWN
    """
    if not url or not isinstance(url, str):
        return SiteVariant.UNKNOWN

    try:
        domain = (urlparse(url.strip()).hostname or "").lower()
    except ValueError:
        return SiteVariant.UNKNOWN

    if not domain:
        return SiteVariant.UNKNOWN

    if patterns is None:
        patterns = _get_default_patterns()

    for variant, host in patterns:
        if host in domain:
            return variant

    return SiteVariant.UNKNOWN
