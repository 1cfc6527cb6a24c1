"""
HTTP fetch collaborator.

Modules:
    client - PageFetcher (requests-based) and its FetchResponse/FetchError
"""

from .client import FetchError, FetchResponse, PageFetcher

__all__ = ['PageFetcher', 'FetchResponse', 'FetchError']
