"""
Base Extractor

Shared page handling for site extractors: fetching the product page,
loading pre-fetched HTML and building the product reference.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urldefrag

from bs4 import BeautifulSoup

from ..fetch import FetchError, PageFetcher
from ..models import ExtractionResult, ProductReference, SiteVariant
from .errors import ExtractionError

logger = logging.getLogger(__name__)


class BaseExtractor:
    """
    Extracts material and size stock for one product of one site family.

    Subclasses implement extract(). Fatal problems are raised as
    ExtractionError; missing facts are returned as None fields.

    Usage:
        reference = NextDataExtractor.parse_reference(url, SiteVariant.COS, settings)
        extractor = NextDataExtractor(reference, fetcher, settings)
        extractor.fetch()
        result = extractor.extract()
    """

    # Needs the fetcher even when the page HTML is supplied
    uses_secondary_source = False

    def __init__(
        self,
        reference: ProductReference,
        fetcher: PageFetcher | None,
        site_settings: dict[str, Any] | None = None,
    ):
        self.reference = reference
        self.fetcher = fetcher
        self.settings = site_settings or {}
        self.html = None
        self.soup = None

    @classmethod
    def parse_reference(
        cls,
        url: str,
        variant: SiteVariant,
        site_settings: dict[str, Any] | None = None,
    ) -> ProductReference:
        """Build the product reference; the fetch URL is the input without its fragment."""
        canonical, _ = urldefrag(url.strip())
        return ProductReference(url=canonical, variant=variant)

    def fetch(self) -> None:
        """Fetch the product page HTML."""
        try:
            response = self.fetcher.fetch(self.reference.url, credentials=True, accept="text/html")
        except FetchError as e:
            raise ExtractionError(f"page fetch failed: {e}") from e

        if not response.ok:
            raise ExtractionError(f"page fetch failed: HTTP {response.status}")

        self.load_html(response.text)

    def load_html(self, html: str) -> None:
        """Load pre-fetched HTML for extraction without a network request."""
        self.html = html or ""
        self.soup = BeautifulSoup(self.html, "lxml")

    def extract(self) -> ExtractionResult:
        raise NotImplementedError
