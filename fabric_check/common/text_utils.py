"""
Text Utilities

Helper functions for text cleanup.
"""

import re


def clean_text(text: str) -> str:
    """
    Collapse runs of whitespace (including newlines) into single spaces.

    Args:
        text: Raw text, possibly None or non-string

    Returns:
        Trimmed single-line text, or empty string
    """
    if not text:
        return ""
    if not isinstance(text, str):
        text = str(text)
    return re.sub(r'\s+', ' ', text).strip()
