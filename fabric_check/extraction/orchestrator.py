"""
Extraction Orchestrator

Entry points that turn a product URL into an ExtractionResult.
Site detection, extractor selection and fetching happen here; every
failure is returned as a result with `error` set, never raised.
"""

from __future__ import annotations

import logging
from typing import Any

from ..common.config_loader import (
    CONFIG_ERRORS,
    build_site_patterns,
    load_http_settings,
    load_site_settings,
)
from ..common.result_cache import ResultCache
from ..fetch import PageFetcher
from ..models import ExtractionResult, SiteVariant
from .errors import CONFIG_UNAVAILABLE, UNSUPPORTED_SITE, ExtractionError
from .registry import get_extractor_for_variant
from .site_detector import detect_site

logger = logging.getLogger(__name__)

SiteSettings = dict[SiteVariant, dict[str, Any]]

_shared_site_settings: SiteSettings | None = None


def _get_site_settings() -> SiteSettings:
    global _shared_site_settings
    if _shared_site_settings is None:
        _shared_site_settings = load_site_settings()
    return _shared_site_settings


def create_fetcher() -> PageFetcher:
    """Build a PageFetcher from the http section of config/sites.yaml."""
    http = load_http_settings()
    return PageFetcher(timeout=http.get("timeout"), user_agent=http.get("user_agent"))


def extract_product(
    url: str,
    fetcher: PageFetcher | None = None,
    site_settings: SiteSettings | None = None,
) -> ExtractionResult:
    """
    Extract material composition and size stock for a product URL.

    Args:
        url: Product page URL
        fetcher: Fetch collaborator (a new one is created and closed if omitted)
        site_settings: Per-site settings (defaults to config/sites.yaml)

    Returns:
        ExtractionResult; `error` is set for unsupported sites and fatal failures
    """
    return _run(url, None, fetcher, site_settings)


def extract_product_from_html(
    url: str,
    html: str,
    fetcher: PageFetcher | None = None,
    site_settings: SiteSettings | None = None,
) -> ExtractionResult:
    """
    Extract from an already loaded product page instead of fetching it.

    Sites whose stock lives behind an API still query that API.

    Args:
        url: URL the HTML was loaded from
        html: Page HTML
        fetcher: Fetch collaborator for secondary requests (created only
            when the site needs one and none is given)
        site_settings: Per-site settings (defaults to config/sites.yaml)

    Returns:
        ExtractionResult
    """
    return _run(url, html, fetcher, site_settings)


def extract_product_cached(
    url: str,
    cache: ResultCache,
    fetcher: PageFetcher | None = None,
    site_settings: SiteSettings | None = None,
) -> ExtractionResult:
    """Return the cached result for url, extracting it on a miss."""
    return cache.get_or_compute(url, lambda: extract_product(url, fetcher, site_settings))


def _run(
    url: str,
    html: str | None,
    fetcher: PageFetcher | None,
    site_settings: SiteSettings | None,
) -> ExtractionResult:
    try:
        if site_settings is None:
            site_settings = _get_site_settings()
        patterns = build_site_patterns(site_settings)
    except CONFIG_ERRORS as e:
        logger.error("Could not load site configuration: %s", e)
        return ExtractionResult.failure(f"{CONFIG_UNAVAILABLE}: {e}")

    variant = detect_site(url, patterns)
    extractor_class = get_extractor_for_variant(variant)
    if extractor_class is None:
        logger.warning("Unsupported site: %s", url)
        return ExtractionResult.failure(UNSUPPORTED_SITE)

    needs_fetcher = html is None or extractor_class.uses_secondary_source
    if fetcher is not None or not needs_fetcher:
        return _run_extractor(extractor_class, variant, url, html, fetcher, site_settings)

    try:
        own_fetcher = create_fetcher()
    except CONFIG_ERRORS as e:
        logger.error("Could not load HTTP settings: %s", e)
        return ExtractionResult.failure(f"{CONFIG_UNAVAILABLE}: {e}")
    with own_fetcher:
        return _run_extractor(extractor_class, variant, url, html, own_fetcher, site_settings)


def _run_extractor(extractor_class, variant, url, html, fetcher, site_settings) -> ExtractionResult:
    settings = site_settings.get(variant, {})
    try:
        reference = extractor_class.parse_reference(url, variant, settings)
        extractor = extractor_class(reference, fetcher, settings)
        if html is None:
            extractor.fetch()
        else:
            extractor.load_html(html)
        result = extractor.extract()
    except ExtractionError as e:
        logger.warning("Extraction failed for %s: %s", url, e)
        return ExtractionResult.failure(str(e))
    except Exception as e:
        logger.exception("Unexpected error extracting %s", url)
        return ExtractionResult.failure(f"extraction failed: {e}")

    logger.info(
        "Extracted %s (%s): material=%s, sizes=%s",
        url,
        variant.value,
        "yes" if result.material else "no",
        len(result.sizes) if result.sizes is not None else "none",
    )
    return result
