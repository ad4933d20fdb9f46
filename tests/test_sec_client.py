"""
SEC client tests against a fake EDGAR (httpx.MockTransport)
"""
import asyncio

import httpx
import pytest

from app.core.config import Settings
from app.services.sec_client import SECClient, SECClientError

from conftest import TICKER_MAP, TICKER_MAP_URL, make_client, submissions_url

DOC_URL = "https://www.sec.gov/Archives/edgar/data/320193/000032019324000010/aapl-8k.htm"


class TestFetchTickerMap:

    def test_normalizes_tickers_and_ciks(self):
        routes = {
            TICKER_MAP_URL: (200, {
                **TICKER_MAP,
                "3": {"cik_str": 42, "title": "No ticker"},
                "4": {"cik_str": 7, "ticker": "", "title": "Empty ticker"},
            })
        }

        ticker_map = asyncio.run(make_client(routes).fetch_ticker_map())

        assert ticker_map == {
            "AAPL": "0000320193",
            "TSLA": "0001318605",
            "MSFT": "0000789019",
        }

    def test_sends_user_agent(self):
        requests = []
        routes = {TICKER_MAP_URL: (200, TICKER_MAP)}

        asyncio.run(make_client(routes, requests).fetch_ticker_map())

        assert len(requests) == 1
        assert requests[0].headers["User-Agent"] == "digest-tests@example.com"

    def test_failure_raises(self):
        routes = {TICKER_MAP_URL: (503, "Service Unavailable")}

        with pytest.raises(SECClientError, match="Failed to load ticker map from SEC"):
            asyncio.run(make_client(routes).fetch_ticker_map())

    def test_invalid_json_raises(self):
        routes = {TICKER_MAP_URL: (200, "<html>not json</html>")}

        with pytest.raises(SECClientError):
            asyncio.run(make_client(routes).fetch_ticker_map())

    def test_transport_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = SECClient(
            user_agent="digest-tests@example.com",
            rate_limit_delay=0,
            transport=httpx.MockTransport(handler),
        )

        with pytest.raises(SECClientError):
            asyncio.run(client.fetch_ticker_map())


class TestFetchSubmissions:

    def test_loads_document(self):
        routes = {submissions_url("0000320193"): (200, {"cik": "320193", "filings": {"recent": {}}})}

        data = asyncio.run(make_client(routes).fetch_submissions("0000320193"))

        assert data["cik"] == "320193"

    def test_missing_company_raises(self):
        with pytest.raises(SECClientError, match="CIK 0000000001"):
            asyncio.run(make_client({}).fetch_submissions("0000000001"))


class TestFetchDocument:

    def test_returns_text(self):
        routes = {DOC_URL: (200, "<p>Item 2.02 Results</p>")}

        assert asyncio.run(make_client(routes).fetch_document(DOC_URL)) == "<p>Item 2.02 Results</p>"

    def test_non_success_returns_none(self):
        assert asyncio.run(make_client({}).fetch_document(DOC_URL)) is None


class TestFromSettings:

    def test_configuration_is_injected(self):
        settings = Settings(
            SEC_USER_AGENT="research-desk@example.com",
            SEC_REQUEST_TIMEOUT=5.0,
            SEC_RATE_LIMIT_DELAY=0.25,
            SEC_ARCHIVE_URL="https://mirror.example.com/edgar/data",
        )

        client = SECClient.from_settings(settings)

        assert client.headers["User-Agent"] == "research-desk@example.com"
        assert client.timeout == 5.0
        assert client.rate_limit_delay == 0.25
        assert client.ticker_map_url == settings.SEC_TICKER_MAP_URL
        assert client.archive_url == "https://mirror.example.com/edgar/data"
