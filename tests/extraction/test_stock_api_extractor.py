"""Tests for fabric_check/extraction/stock_api_extractor.py"""

import json

import pytest

from fabric_check.extraction.errors import UNRECOGNIZED_URL, ExtractionError
from fabric_check.extraction.stock_api_extractor import (
    StockApiExtractor,
    aggregate_stock,
    resolve_client_credential,
)
from fabric_check.fetch import FetchError
from fabric_check.models import ProductReference, SiteVariant, SizeEntry

COMPOSITION_HTML = (
    "Pflegehinweis beachten<br>"
    "456675: Körper: 47% Polyester, 42% Polyester, 11% Elasthan<br>"
    "456676: Körper: 52% Polyester, 48% Elasthan"
)


@pytest.fixture
def peek_settings(site_settings):
    return site_settings[SiteVariant.PEEK]


def make_extractor(url, fetcher, settings):
    reference = StockApiExtractor.parse_reference(url, SiteVariant.PEEK, settings)
    return StockApiExtractor(reference, fetcher, settings)


class TestParseReference:
    def test_full_url(self, peek_url, peek_settings):
        ref = StockApiExtractor.parse_reference(peek_url, SiteVariant.PEEK, peek_settings)
        assert ref.country == "de"
        assert ref.language == "de"
        assert ref.product_id == "2174855"
        assert ref.price_group == "02"
        assert ref.locale == "de-DE"

    def test_default_price_group(self, peek_settings):
        url = "https://www.peek-cloppenburg.at/de/p/marc-o-polo-pullover-2201934/"
        ref = StockApiExtractor.parse_reference(url, SiteVariant.PEEK, peek_settings)
        assert ref.country == "at"
        assert ref.price_group == "01"

    def test_default_price_group_without_settings(self):
        url = "https://www.peek-cloppenburg.ch/fr/p/2201934"
        ref = StockApiExtractor.parse_reference(url, SiteVariant.PEEK)
        assert ref.language == "fr"
        assert ref.product_id == "2201934"
        assert ref.price_group == "01"

    def test_strips_fragment(self, peek_settings):
        url = "https://www.peek-cloppenburg.de/de/p/hemd-2174855/#details"
        ref = StockApiExtractor.parse_reference(url, SiteVariant.PEEK, peek_settings)
        assert ref.url == "https://www.peek-cloppenburg.de/de/p/hemd-2174855/"

    @pytest.mark.parametrize("url", [
        "https://www.peek-cloppenburg.de/de/damen/kleider/",
        "https://www.peek-cloppenburg.de/de/p/hemd-slim-fit/",
        "https://www.peek-cloppenburg.com/de/p/hemd-2174855/",
        "https://localhost/de/p/hemd-2174855/",
    ])
    def test_unrecognized(self, url, peek_settings):
        with pytest.raises(ExtractionError, match=UNRECOGNIZED_URL):
            StockApiExtractor.parse_reference(url, SiteVariant.PEEK, peek_settings)


class TestResolveClientCredential:
    def make_ref(self, country, language):
        return ProductReference(url="u", variant=SiteVariant.PEEK, country=country, language=language)

    def test_known_locale(self):
        assert resolve_client_credential(self.make_ref("de", "de"), {"de-DE": "abc"}) == "abc"

    def test_unknown_locale_uses_template(self):
        assert resolve_client_credential(self.make_ref("nl", "nl"), {"de-DE": "abc"}) == "web-nl-nl"

    def test_custom_template(self):
        ref = self.make_ref("ch", "fr")
        assert resolve_client_credential(ref, {}, "shop:{country}/{language}") == "shop:ch/fr"


class TestAggregateStock:
    def test_any_colour_enabled_means_in_stock(self):
        payload = {
            "status": "OK",
            "lineItems": [
                {"sizeDisplayCode": "M", "salesEnabled": False},
                {"sizeDisplayCode": "M", "salesEnabled": True},
            ],
            "sizeDisplays": [],
        }
        assert aggregate_stock(payload) == [SizeEntry("M", True)]

    def test_all_disabled_means_sold_out(self):
        payload = {
            "status": "ok",
            "lineItems": [
                {"sizeDisplayCode": "M", "salesEnabled": False},
                {"sizeDisplayCode": "M", "salesEnabled": False},
            ],
        }
        assert aggregate_stock(payload) == [SizeEntry("M", False)]

    def test_hidden_sizes_removed_and_order_kept(self, stock_payload):
        assert aggregate_stock(stock_payload) == [
            SizeEntry("S", False),
            SizeEntry("M", True),
            SizeEntry("L", True),
        ]

    def test_display_name_used(self):
        payload = {
            "status": "OK",
            "lineItems": [{"sizeDisplayCode": "048", "salesEnabled": True}],
            "sizeDisplays": [{"displayCode": "048", "displayName": "48", "displayed": True}],
        }
        assert aggregate_stock(payload) == [SizeEntry("48", True)]

    def test_truthy_non_boolean_is_not_enabled(self):
        payload = {"status": "OK", "lineItems": [{"sizeDisplayCode": "S", "salesEnabled": "true"}]}
        assert aggregate_stock(payload) == [SizeEntry("S", False)]

    def test_bad_status(self, stock_payload):
        stock_payload["status"] = "ERROR"
        with pytest.raises(ValueError, match="unexpected status"):
            aggregate_stock(stock_payload)

    def test_missing_line_items(self):
        with pytest.raises(KeyError):
            aggregate_stock({"status": "OK"})


class TestExtract:
    def test_material_and_sizes(self, peek_url, peek_settings, peek_html, stock_payload, stock_api_url, make_fetcher):
        fetcher = make_fetcher({
            peek_url: (200, peek_html(COMPOSITION_HTML)),
            stock_api_url: (200, json.dumps(stock_payload)),
        })
        extractor = make_extractor(peek_url, fetcher, peek_settings)
        extractor.fetch()
        result = extractor.extract()

        assert result.error is None
        assert result.material == "Körper: 47% Polyester, 42% Polyester, 11% Elasthan"
        assert result.sizes == [SizeEntry("S", False), SizeEntry("M", True), SizeEntry("L", True)]

    def test_stock_request_headers(self, peek_url, peek_settings, peek_html, stock_payload, stock_api_url, make_fetcher):
        fetcher = make_fetcher({stock_api_url: (200, json.dumps(stock_payload))})
        extractor = make_extractor(peek_url, fetcher, peek_settings)
        extractor.load_html(peek_html(COMPOSITION_HTML))
        extractor.extract()

        fetcher.fetch.assert_called_once_with(
            stock_api_url,
            headers={"X-Client-Id": "cred-de-de"},
            accept="application/json",
        )

    def test_missing_composition_block(self, peek_url, peek_settings, peek_html, stock_payload, stock_api_url, make_fetcher):
        fetcher = make_fetcher({stock_api_url: (200, json.dumps(stock_payload))})
        extractor = make_extractor(peek_url, fetcher, peek_settings)
        extractor.load_html(peek_html())
        result = extractor.extract()

        assert result.material is None
        assert len(result.sizes) == 3

    @pytest.mark.parametrize("stock_response", [
        (500, "Internal Server Error"),
        (403, '{"status": "FORBIDDEN"}'),
        (200, "<html>maintenance</html>"),
        (200, '{"status": "ERROR", "lineItems": []}'),
        (200, '{"status": "OK", "lineItems": [{"salesEnabled": true}]}'),
        (200, '["unexpected"]'),
        FetchError("request failed: timeout"),
    ])
    def test_stock_failures_only_drop_sizes(self, stock_response, peek_url, peek_settings, peek_html, stock_api_url, make_fetcher):
        fetcher = make_fetcher({stock_api_url: stock_response})
        extractor = make_extractor(peek_url, fetcher, peek_settings)
        extractor.load_html(peek_html(COMPOSITION_HTML))
        result = extractor.extract()

        assert result.error is None
        assert result.material == "Körper: 47% Polyester, 42% Polyester, 11% Elasthan"
        assert result.sizes is None

    def test_missing_api_url_drops_sizes(self, peek_url, peek_html, make_fetcher):
        settings = {"composition_selector": '[data-testid="product-material-composition"]'}
        fetcher = make_fetcher({})
        extractor = make_extractor(peek_url, fetcher, settings)
        extractor.load_html(peek_html(COMPOSITION_HTML))
        result = extractor.extract()

        assert result.sizes is None
        fetcher.fetch.assert_not_called()

    @pytest.mark.parametrize("template", [
        "web-{language}-{region}",
        "web-{0}",
        "web-{country.code}",
    ])
    def test_broken_credential_template_drops_sizes(self, template, peek_url, peek_settings, peek_html, make_fetcher):
        settings = dict(peek_settings)
        settings["stock_api"] = dict(
            peek_settings["stock_api"],
            credentials={},
            default_credential_template=template,
        )
        fetcher = make_fetcher({})
        extractor = make_extractor(peek_url, fetcher, settings)
        extractor.load_html(peek_html(COMPOSITION_HTML))
        result = extractor.extract()

        assert result.error is None
        assert result.material == "Körper: 47% Polyester, 42% Polyester, 11% Elasthan"
        assert result.sizes is None
        fetcher.fetch.assert_not_called()

    def test_page_fetch_failure_is_fatal(self, peek_url, peek_settings, make_fetcher):
        extractor = make_extractor(peek_url, make_fetcher({peek_url: (404, "gone")}), peek_settings)
        with pytest.raises(ExtractionError, match="HTTP 404"):
            extractor.fetch()
