"""
Next.js Page Data Extractor

Single-source extraction for sites that ship all product data in a
<script id="__NEXT_DATA__"> JSON block (COS, Arket).
"""

import json
import logging
from typing import List, Optional

from ..models import ExtractionResult, SizeEntry
from .base import BaseExtractor
from .errors import NO_DATA_SECTION, ExtractionError
from .parsers import find_size_table, normalize_sizes, parse_structured_composition
from .parsers.composition import DEFAULT_COMPOSITION_KEY

logger = logging.getLogger(__name__)


class NextDataExtractor(BaseExtractor):
    """Reads composition and size stock from the embedded Next.js data."""

    DEFAULT_SCRIPT_ID = "__NEXT_DATA__"

    @property
    def script_id(self) -> str:
        return self.settings.get("script_id") or self.DEFAULT_SCRIPT_ID

    @property
    def composition_key(self) -> str:
        return self.settings.get("composition_key") or DEFAULT_COMPOSITION_KEY

    def extract(self) -> ExtractionResult:
        """Extract material and sizes from the page data block."""
        raw = self._page_data_text()
        if not raw:
            raise ExtractionError(NO_DATA_SECTION)

        material = parse_structured_composition(raw, self.composition_key)
        sizes = self._extract_sizes(raw)

        logger.debug(
            "%s: material=%s, sizes=%s",
            self.reference.url,
            "found" if material else "missing",
            len(sizes) if sizes is not None else "missing",
        )
        return ExtractionResult(material=material, sizes=sizes)

    def _page_data_text(self) -> Optional[str]:
        """Raw text of the page data script, or None if the page has none."""
        if self.soup is None:
            return None
        script = self.soup.find("script", id=self.script_id)
        if script is None or not script.string:
            logger.debug("No <script id=%s> in %s", self.script_id, self.reference.url)
            return None
        return script.string.strip()

    def _extract_sizes(self, raw: str) -> Optional[List[SizeEntry]]:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.debug("Page data is not valid JSON: %s", e)
            return None

        table = find_size_table(data)
        if table is None:
            return None
        return normalize_sizes(table)
