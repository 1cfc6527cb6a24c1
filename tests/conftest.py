"""Shared test fixtures."""

import json
from unittest.mock import MagicMock

import pytest

from fabric_check.fetch import FetchResponse, PageFetcher
from fabric_check.models import SiteVariant

COS_URL = "https://www.cos.com/en-de/women/dresses/product/linen-dress-1234567001"
PEEK_URL = "https://www.peek-cloppenburg.de/de/p/hugo-hemd-slim-fit-2174855/?pg=02"
STOCK_API_URL = "https://api.example.test/de/de/2174855?pg=02"


def compact_json(data) -> str:
    """Serialize like Next.js does (no spaces after separators)."""
    return json.dumps(data, separators=(",", ":"))


def make_next_data_html(data, script_id: str = "__NEXT_DATA__") -> str:
    """Build a product page carrying data in a Next.js script block."""
    payload = data if isinstance(data, str) else compact_json(data)
    return (
        "<html><head><title>Product</title></head><body>"
        '<div id="__next"><h1>Linen Dress</h1></div>'
        f'<script id="{script_id}" type="application/json">{payload}</script>'
        "</body></html>"
    )


def make_peek_html(composition_html: str = "") -> str:
    """Build a Peek & Cloppenburg style product page."""
    block = ""
    if composition_html:
        block = f'<div data-testid="product-material-composition">{composition_html}</div>'
    return f"<html><body><h1>HUGO Hemd</h1>{block}</body></html>"


@pytest.fixture
def composition_groups():
    return [
        {"type": "Shell", "materials": [{"percentage": "80", "material": "Cotton"}]},
        {"type": "Lining", "materials": [{"percentage": "100", "material": "Polyester"}]},
    ]


@pytest.fixture
def size_items():
    return [
        {"name": "XS", "stock": "yes"},
        {"name": "S", "stock": "no"},
        {"name": "M", "stock": "oos"},
        {"name": "L", "stock": "low"},
    ]


@pytest.fixture
def cos_page_data(composition_groups, size_items):
    """Page data shaped like a COS product page."""
    return {
        "props": {
            "pageProps": {
                "product": {
                    "name": "Linen Dress",
                    "var_material_composition_desc": compact_json(composition_groups),
                    "variants": [
                        {"color": "Black", "sizes": {"items": size_items}},
                    ],
                },
            },
        },
        "page": "/product/[slug]",
    }


@pytest.fixture
def cos_page_html(cos_page_data):
    return make_next_data_html(cos_page_data)


@pytest.fixture
def stock_payload():
    """Stock API response with two colours per size and one hidden size."""
    return {
        "status": "OK",
        "lineItems": [
            {"sizeDisplayCode": "S", "colorCode": "010", "salesEnabled": False},
            {"sizeDisplayCode": "M", "colorCode": "010", "salesEnabled": False},
            {"sizeDisplayCode": "M", "colorCode": "450", "salesEnabled": True},
            {"sizeDisplayCode": "L", "colorCode": "010", "salesEnabled": True},
            {"sizeDisplayCode": "XXL", "colorCode": "010", "salesEnabled": True},
        ],
        "sizeDisplays": [
            {"displayCode": "S", "displayName": "S", "displayed": True},
            {"displayCode": "M", "displayName": "M", "displayed": True},
            {"displayCode": "L", "displayName": "L", "displayed": True},
            {"displayCode": "XXL", "displayName": "XXL", "displayed": False},
        ],
    }


@pytest.fixture
def site_settings():
    """Site settings as loaded from config/sites.yaml, pointing at a test API."""
    return {
        SiteVariant.COS: {
            "variant": "cos",
            "hosts": ["cos.com"],
            "script_id": "__NEXT_DATA__",
            "composition_key": "var_material_composition_desc",
        },
        SiteVariant.ARKET: {
            "variant": "arket",
            "hosts": ["arket.com"],
            "script_id": "__NEXT_DATA__",
            "composition_key": "var_material_composition_desc",
        },
        SiteVariant.PEEK: {
            "variant": "peek",
            "hosts": ["peek-cloppenburg."],
            "composition_selector": '[data-testid="product-material-composition"]',
            "stock_api": {
                "base_url": "https://api.example.test/{country}/{language}/{product_id}?pg={price_group}",
                "credential_header": "X-Client-Id",
                "default_price_group": "01",
                "default_credential_template": "web-{language}-{country}",
                "credentials": {"de-DE": "cred-de-de"},
            },
        },
    }


@pytest.fixture
def make_fetcher():
    """
    Build a mock PageFetcher answering from a URL -> response map.

    Values may be a FetchResponse, an exception instance (raised), or a
    (status, text) tuple. Unknown URLs answer 404.
    """
    def _make(responses):
        fetcher = MagicMock(spec=PageFetcher)

        def fetch(url, credentials=False, headers=None, accept="text/html"):
            value = responses.get(url, (404, "Not Found"))
            if isinstance(value, Exception):
                raise value
            if isinstance(value, tuple):
                return FetchResponse(status=value[0], text=value[1])
            return value

        fetcher.fetch.side_effect = fetch
        return fetcher

    return _make


@pytest.fixture
def next_data_html():
    """Factory fixture for make_next_data_html."""
    return make_next_data_html


@pytest.fixture
def peek_html():
    """Factory fixture for make_peek_html."""
    return make_peek_html


@pytest.fixture
def stock_api_url():
    return STOCK_API_URL


@pytest.fixture
def cos_url():
    return COS_URL


@pytest.fixture
def peek_url():
    return PEEK_URL
