"""
Composition Parser

Turns raw material composition data into a display string such as
"Shell: 80% Cotton · Lining: 100% Polyester".

Two source shapes are handled:
- Structured: a JSON list of groups embedded as an escaped string inside
  a larger JSON document (Next.js page data)
- Free text: a human-written HTML blob with one line per variant
"""

import json
import logging
import re
from typing import Optional

from bs4 import BeautifulSoup

from ...common.text_utils import clean_text
from ...models import MaterialComposition, MaterialGroup
from ...models.product import GROUP_SEPARATOR

logger = logging.getLogger(__name__)

DEFAULT_COMPOSITION_KEY = "var_material_composition_desc"

PERCENT_PATTERN = re.compile(r'\d+%')
ID_PREFIX_PATTERN = re.compile(r'^[\d,]+:\s*')
OPTION_SEPARATOR_PATTERN = re.compile(r'\s*/\s*')


def _marker_pattern(key: str) -> re.Pattern:
    # "key":"<JSON string body with escaped quotes>"
    return re.compile(rf'"{re.escape(key)}":"((?:[^"\\]|\\.)*)"')


def _unescape(value: str) -> str:
    return value.replace('\\"', '"').replace('\\\\', '\\')


def parse_structured_composition(
    text: str,
    composition_key: str = DEFAULT_COMPOSITION_KEY,
) -> Optional[str]:
    """
    Extract the composition embedded under composition_key in raw page data.

    Args:
        text: Raw text containing "<composition_key>":"<escaped JSON>"
        composition_key: JSON key holding the escaped composition

    Returns:
        Rendered composition, or None if it is missing or malformed
    """
    if not text:
        return None

    match = _marker_pattern(composition_key).search(text)
    if not match:
        logger.debug("No %s marker found", composition_key)
        return None

    try:
        data = json.loads(_unescape(match.group(1)))
        composition = MaterialComposition(groups=[
            MaterialGroup(
                label=str(group.get("type") or ""),
                materials=[
                    (str(item["material"]), str(item["percentage"]))
                    for item in group["materials"]
                ],
            )
            for group in data
        ])
    except (json.JSONDecodeError, TypeError, KeyError, AttributeError) as e:
        logger.debug("Unparseable composition data: %s", e)
        return None

    return composition.render() or None


def _strip_markup(fragment: str) -> str:
    """Remove HTML markup, turning <br> into newlines."""
    soup = BeautifulSoup(fragment, "lxml")
    for br in soup.find_all("br"):
        br.replace_with("\n")
    return soup.get_text()


def parse_freetext_composition(fragment: str) -> Optional[str]:
    """
    Pick the composition out of a free-text HTML blob.

    Only the first line containing a percentage is kept. Products listing
    a different composition per colour lose the later variants; they are
    usually near-duplicates and one line fits the badge.

    Args:
        fragment: HTML or plain text, lines separated by <br>

    Returns:
        Cleaned composition line; when no line has a percentage, the
        markup-stripped text with its line breaks kept (lines trimmed,
        blank ones dropped); None for empty input
    """
    if not fragment or not fragment.strip():
        return None

    text = _strip_markup(fragment)
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if not lines:
        return None

    for line in lines:
        if PERCENT_PATTERN.search(line):
            line = ID_PREFIX_PATTERN.sub('', line)
            line = OPTION_SEPARATOR_PATTERN.sub(GROUP_SEPARATOR, line)
            return clean_text(line)

    return "\n".join(lines)
