"""
Stock API Extractor

Two-source extraction for Peek & Cloppenburg:
- Composition comes from the product page (free-text HTML block)
- Live size stock comes from a separate availability API, authenticated
  by a per-locale client credential header

The product page has no usable stock data, so the API call is always made
after the page fetch. Any stock API failure only drops the sizes.
"""

from __future__ import annotations

import logging
import re
from typing import Any
from urllib.parse import parse_qs, urldefrag, urlparse

from ..fetch import FetchError
from ..models import ExtractionResult, ProductReference, SiteVariant, SizeEntry
from .base import BaseExtractor
from .errors import UNRECOGNIZED_URL, ExtractionError
from .parsers import normalize_sizes, parse_freetext_composition

logger = logging.getLogger(__name__)

# /<language>/p/<slug>-<product id>/
PRODUCT_PATH_PATTERN = re.compile(r'^/(?P<language>[a-z]{2})/p/(?:[^/]*-)?(?P<product_id>\d+)/?$')
COUNTRY_PATTERN = re.compile(r'^[a-z]{2}$')

DEFAULT_PRICE_GROUP = "01"
DEFAULT_CREDENTIAL_HEADER = "X-Client-Id"
DEFAULT_CREDENTIAL_TEMPLATE = "web-{language}-{country}"
DEFAULT_COMPOSITION_SELECTOR = '[data-testid="product-material-composition"]'


def resolve_client_credential(
    reference: ProductReference,
    credentials: dict[str, str],
    template: str = DEFAULT_CREDENTIAL_TEMPLATE,
) -> str:
    """
    Look up the API client credential for the product's locale.

    Args:
        reference: Parsed product reference (country, language)
        credentials: Table mapping locale ("de-DE") to credential
        template: Format string used for locales missing from the table

    Returns:
        Credential string
    """
    credential = credentials.get(reference.locale)
    if credential:
        return credential
    return template.format(language=reference.language, country=reference.country)


def aggregate_stock(payload: dict[str, Any]) -> list[SizeEntry]:
    """
    Reduce an availability response to one entry per size.

    Sizes marked as not displayed are removed first. A size is in stock
    when any of its line items (one per colour) is sales-enabled. Sizes
    keep the order in which they first appear among the line items.

    Args:
        payload: Decoded API response

    Returns:
        List of SizeEntry

    Raises:
        ValueError: If the response status is not OK
        KeyError, TypeError, AttributeError: If the response has an unexpected shape
    """
    status = payload.get("status")
    if str(status).lower() != "ok":
        raise ValueError(f"unexpected status {status!r}")

    displays = {entry["displayCode"]: entry for entry in payload.get("sizeDisplays") or []}
    hidden = {code for code, entry in displays.items() if not entry.get("displayed", True)}

    available: dict[str, bool] = {}
    for item in payload["lineItems"]:
        code = item["sizeDisplayCode"]
        if code in hidden:
            continue
        available[code] = available.get(code, False) or item.get("salesEnabled") is True

    items = [
        {
            "name": displays.get(code, {}).get("displayName") or code,
            "stock": "yes" if in_stock else "no",
        }
        for code, in_stock in available.items()
    ]
    return normalize_sizes(items)


class StockApiExtractor(BaseExtractor):
    """Composition from the page, live stock from the availability API."""

    uses_secondary_source = True

    @classmethod
    def parse_reference(
        cls,
        url: str,
        variant: SiteVariant,
        site_settings: dict[str, Any] | None = None,
    ) -> ProductReference:
        """
        Parse locale, product id and price group from a product URL.

        Example:
            https://www.peek-cloppenburg.de/de/p/hugo-hemd-2174855/?pg=02
            -> country "de", language "de", product id "2174855", price group "02"

        Raises:
            ExtractionError: If the URL does not have the product page shape
        """
        canonical, _ = urldefrag(url.strip())
        parsed = urlparse(canonical)

        host = (parsed.hostname or "").lower()
        country = host.rsplit(".", 1)[-1] if "." in host else ""
        match = PRODUCT_PATH_PATTERN.match(parsed.path)
        if not COUNTRY_PATTERN.match(country) or not match:
            raise ExtractionError(UNRECOGNIZED_URL)

        api_settings = (site_settings or {}).get("stock_api") or {}
        query = parse_qs(parsed.query)
        price_group = (
            query.get("pg", [""])[0]
            or str(api_settings.get("default_price_group") or DEFAULT_PRICE_GROUP)
        )

        return ProductReference(
            url=canonical,
            variant=variant,
            country=country,
            language=match.group("language"),
            product_id=match.group("product_id"),
            price_group=price_group,
        )

    @property
    def api_settings(self) -> dict[str, Any]:
        return self.settings.get("stock_api") or {}

    def extract(self) -> ExtractionResult:
        """Extract material from the page and sizes from the stock API."""
        material = self._extract_material()
        sizes = self._fetch_sizes()
        return ExtractionResult(material=material, sizes=sizes)

    def _extract_material(self) -> str | None:
        if self.soup is None:
            return None
        selector = self.settings.get("composition_selector") or DEFAULT_COMPOSITION_SELECTOR
        element = self.soup.select_one(selector)
        if element is None:
            logger.debug("No composition block (%s) in %s", selector, self.reference.url)
            return None
        return parse_freetext_composition(element.decode_contents())

    def build_stock_url(self) -> str:
        base_url = self.api_settings.get("base_url")
        if not base_url:
            raise ValueError("stock_api.base_url is not configured")
        return base_url.format(
            country=self.reference.country,
            language=self.reference.language,
            product_id=self.reference.product_id,
            price_group=self.reference.price_group,
        )

    def build_stock_headers(self) -> dict[str, str]:
        header = self.api_settings.get("credential_header") or DEFAULT_CREDENTIAL_HEADER
        credential = resolve_client_credential(
            self.reference,
            self.api_settings.get("credentials") or {},
            self.api_settings.get("default_credential_template") or DEFAULT_CREDENTIAL_TEMPLATE,
        )
        return {header: credential}

    def _fetch_sizes(self) -> list[SizeEntry] | None:
        """Query the stock API; any failure yields None."""
        try:
            url = self.build_stock_url()
            headers = self.build_stock_headers()
        except (ValueError, KeyError, IndexError, AttributeError) as e:
            logger.warning("Stock API unavailable for %s: %s", self.reference.url, e)
            return None

        try:
            response = self.fetcher.fetch(url, headers=headers, accept="application/json")
        except FetchError as e:
            logger.warning("Stock API request failed for %s: %s", self.reference.product_id, e)
            return None

        if not response.ok:
            logger.warning("Stock API returned HTTP %s for %s", response.status, self.reference.product_id)
            return None

        try:
            return aggregate_stock(response.json())
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Unexpected stock API response for %s: %s", self.reference.product_id, e)
            return None
