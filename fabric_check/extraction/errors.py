"""
Extraction errors.

Messages of fatal failures, as reported in ExtractionResult.error.
"""

UNSUPPORTED_SITE = "unsupported site"
NO_DATA_SECTION = "no embedded data section found"
UNRECOGNIZED_URL = "unrecognized product url"
CONFIG_UNAVAILABLE = "site configuration unavailable"


class ExtractionError(Exception):
    """Fatal, strategy-level failure. The message becomes the result's error."""
