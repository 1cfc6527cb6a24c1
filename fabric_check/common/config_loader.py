"""
Configuration Loader

Loads the YAML configuration for supported sites (hosts, page markers,
stock API endpoint and per-locale client credentials) and HTTP defaults.

sites.yaml ships inside the package (fabric_check/config). A config/
directory in the working directory takes precedence, so a deployment can
override hosts or credentials without reinstalling.
"""

from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

from ..models import SiteVariant

SITES_CONFIG = 'sites.yaml'

# Failures a broken or missing config file can surface as
CONFIG_ERRORS = (OSError, yaml.YAMLError, ValueError, KeyError, TypeError, AttributeError)


def _config_dirs() -> List[Any]:
    """Config locations in lookup order: working-directory override, then packaged."""
    return [
        Path.cwd() / 'config',
        resources.files('fabric_check') / 'config',
    ]


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of the config file (e.g., 'sites.yaml')

    Returns:
        Parsed YAML content as dictionary

    Raises:
        FileNotFoundError: If no config location has the file
    """
    candidates = [config_dir / filename for config_dir in _config_dirs()]
    for path in candidates:
        if path.is_file():
            with path.open('r', encoding='utf-8') as f:
                return yaml.safe_load(f) or {}

    raise FileNotFoundError(
        f"Config file {filename} not found. Tried: {', '.join(str(p) for p in candidates)}"
    )


def load_site_settings() -> Dict[SiteVariant, Dict[str, Any]]:
    """
    Load per-site settings keyed by variant, in declaration order.

    Returns:
        Dictionary mapping SiteVariant to its settings block

    Example:
        {
            SiteVariant.COS: {'hosts': ['cos.com'], 'script_id': '__NEXT_DATA__', ...},
            SiteVariant.PEEK: {'hosts': [...], 'stock_api': {'credentials': {...}, ...}},
        }
    """
    config = load_config(SITES_CONFIG)
    settings = {}
    for entry in config.get('sites', []):
        variant = SiteVariant(entry['variant'])
        settings[variant] = entry
    return settings


def build_site_patterns(site_settings: Dict[SiteVariant, Dict[str, Any]]) -> List[Tuple[SiteVariant, str]]:
    """
    Flatten site settings into ordered hostname patterns.

    Args:
        site_settings: Settings as returned by load_site_settings()

    Returns:
        List of (SiteVariant, lowercase hostname substring) pairs
    """
    patterns = []
    for variant, entry in site_settings.items():
        for host in entry.get('hosts', []):
            patterns.append((variant, host.lower()))
    return patterns


def load_site_patterns() -> List[Tuple[SiteVariant, str]]:
    """
    Load hostname patterns for site detection.

    Order matters: the detector returns the first pattern that matches.

    Returns:
        List of (SiteVariant, hostname substring) pairs

    Example:
        [(SiteVariant.COS, 'cos.com'), (SiteVariant.ARKET, 'arket.com'), ...]
    """
    return build_site_patterns(load_site_settings())


def load_http_settings() -> Dict[str, Any]:
    """
    Load HTTP defaults (timeout, user agent).

    Returns:
        Dictionary with 'timeout' and 'user_agent'
    """
    config = load_config(SITES_CONFIG)
    return config.get('http', {})
