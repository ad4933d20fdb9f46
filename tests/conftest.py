"""
Shared fixtures: fake SEC EDGAR endpoints served through httpx.MockTransport
"""
from typing import Dict, List, Optional, Tuple
from datetime import datetime, timezone

import httpx
import pytest

from app.services.sec_client import SECClient

TICKER_MAP_URL = "https://www.sec.gov/files/company_tickers.json"

SAMPLE_8K_HTML = """
<html>
<head>
<style>.hidden { display: none; }</style>
<script>var item = "Item 9.99 should never be seen";</script>
</head>
<body>
<div>UNITED STATES SECURITIES AND EXCHANGE COMMISSION</div>
<p>FORM 8-K</p>
<p><b>Item 2.02</b> Results of Operations and Financial Condition.</p>
<p>On May\u00a02, the Company issued a press release announcing results.</p>
<p>Item 9.01 Financial Statements and Exhibits.</p>
<p>Exhibit 99.1 Press release.</p>
</body>
</html>
"""

TICKER_MAP = {
    "0": {"cik_str": 320193, "ticker": "AAPL", "title": "Apple Inc."},
    "1": {"cik_str": 1318605, "ticker": "TSLA", "title": "Tesla, Inc."},
    "2": {"cik_str": 789019, "ticker": "msft", "title": "MICROSOFT CORP"},
}


def build_submissions(cik: str, entries: List[Tuple[str, str, str, str]]) -> Dict:
    """entries: (form, filingDate, accessionNumber, primaryDocument)"""
    return {
        "cik": cik,
        "name": "Test Co",
        "filings": {
            "recent": {
                "form": [e[0] for e in entries],
                "filingDate": [e[1] for e in entries],
                "reportDate": [e[1] for e in entries],
                "accessionNumber": [e[2] for e in entries],
                "primaryDocument": [e[3] for e in entries],
            }
        },
    }


def submissions_url(cik: str) -> str:
    return f"https://data.sec.gov/submissions/CIK{cik}.json"


def make_transport(routes: Dict, requests_log: Optional[List[httpx.Request]] = None):
    """Serve (status, body) per exact URL; anything else is a 404"""
    def handler(request: httpx.Request) -> httpx.Response:
        if requests_log is not None:
            requests_log.append(request)

        route = routes.get(str(request.url))
        if route is None:
            return httpx.Response(404, text="Not Found")

        status, body = route
        if isinstance(body, (dict, list)):
            return httpx.Response(status, json=body)
        return httpx.Response(status, text=body)

    return httpx.MockTransport(handler)


def make_client(routes: Dict, requests_log: Optional[List[httpx.Request]] = None) -> SECClient:
    return SECClient(
        user_agent="digest-tests@example.com",
        rate_limit_delay=0,
        transport=make_transport(routes, requests_log),
    )


@pytest.fixture
def today() -> str:
    return datetime.now(timezone.utc).date().isoformat()


@pytest.fixture
def sec_routes(today):
    """Ticker map, AAPL submissions with one 8-K filed today, and its document"""
    aapl = build_submissions("320193", [
        ("8-K", today, "0000320193-24-000010", "aapl-8k.htm"),
        ("10-Q", today, "0000320193-24-000009", "aapl-10q.htm"),
    ])
    return {
        TICKER_MAP_URL: (200, TICKER_MAP),
        submissions_url("0000320193"): (200, aapl),
        "https://www.sec.gov/Archives/edgar/data/320193/000032019324000010/aapl-8k.htm": (200, SAMPLE_8K_HTML),
    }
