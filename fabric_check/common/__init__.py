# Common utilities
from .config_loader import (
    CONFIG_ERRORS,
    build_site_patterns,
    load_config,
    load_http_settings,
    load_site_patterns,
    load_site_settings,
)
from .log_config import setup_logging
from .result_cache import ResultCache
from .text_utils import clean_text
