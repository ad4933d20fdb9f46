import httpx
import asyncio
from typing import Dict, Optional
from datetime import datetime
import logging

from app.core.config import Settings

logger = logging.getLogger(__name__)

# Reduce httpx log noise (one line per outbound request otherwise)
logging.getLogger("httpx").setLevel(logging.WARNING)


class SECClientError(Exception):
    """Raised when a required SEC EDGAR document cannot be loaded"""


class SECClient:
    """
    Client for the SEC EDGAR endpoints used by the 8-K digest

    - company_tickers.json: ticker -> CIK mapping
    - submissions API: per-company filing history
    - Archives: primary filing documents

    Rate Limit: 10 requests/second (SEC enforced)

    All configuration is passed in at construction; nothing is read from the
    environment per call. A client holds no state beyond its rate-limit clock,
    so one instance is created per inbound request.
    """

    def __init__(
        self,
        user_agent: str,
        ticker_map_url: str = "https://www.sec.gov/files/company_tickers.json",
        data_url: str = "https://data.sec.gov",
        archive_url: str = "https://www.sec.gov/Archives/edgar/data",
        timeout: float = 30.0,
        rate_limit_delay: float = 0.1,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.ticker_map_url = ticker_map_url
        self.data_url = data_url.rstrip("/")
        self.archive_url = archive_url.rstrip("/")
        self.timeout = timeout
        self.headers = {
            "User-Agent": user_agent,
            "Accept": "text/html,application/json",
        }
        self.transport = transport

        self.rate_limit_delay = rate_limit_delay
        self.last_request_time = datetime.min

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "SECClient":
        return cls(
            user_agent=settings.SEC_USER_AGENT,
            ticker_map_url=settings.SEC_TICKER_MAP_URL,
            data_url=settings.SEC_DATA_URL,
            archive_url=settings.SEC_ARCHIVE_URL,
            timeout=settings.SEC_REQUEST_TIMEOUT,
            rate_limit_delay=settings.SEC_RATE_LIMIT_DELAY,
            **kwargs,
        )

    async def _rate_limit(self):
        """Ensure we don't exceed SEC rate limits"""
        if self.rate_limit_delay <= 0:
            return

        now = datetime.now()
        time_since_last = (now - self.last_request_time).total_seconds()

        if time_since_last < self.rate_limit_delay:
            await asyncio.sleep(self.rate_limit_delay - time_since_last)

        self.last_request_time = datetime.now()

    async def _get(self, url: str) -> httpx.Response:
        await self._rate_limit()

        async with httpx.AsyncClient(transport=self.transport) as client:
            return await client.get(url, headers=self.headers, timeout=self.timeout)

    async def fetch_ticker_map(self) -> Dict[str, str]:
        """
        Load the ticker -> CIK mapping published by the SEC

        Returns:
            Dict of upper-cased ticker to 10-digit zero-padded CIK

        Raises:
            SECClientError: if the mapping document cannot be loaded
        """
        try:
            response = await self._get(self.ticker_map_url)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error fetching ticker map: {e}")
            raise SECClientError("Failed to load ticker map from SEC") from e

        ticker_map = {}
        for entry in data.values():
            ticker = entry.get("ticker")
            if ticker:
                ticker_map[str(ticker).upper()] = str(entry.get("cik_str", "")).zfill(10)

        logger.info(f"Loaded {len(ticker_map)} tickers from SEC")
        return ticker_map

    async def fetch_submissions(self, cik: str) -> Dict:
        """
        Get the submission history for one company

        Args:
            cik: Central Index Key (10 digits, zero-padded)

        Raises:
            SECClientError: if the submissions document cannot be loaded
        """
        url = f"{self.data_url}/submissions/CIK{cik}.json"

        try:
            response = await self._get(url)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Error fetching submissions for CIK {cik}: {e}")
            raise SECClientError(f"Failed to load submissions for CIK {cik}") from e

    async def fetch_document(self, url: str) -> Optional[str]:
        """
        Download the raw markup of a filing document

        Returns:
            Document text, or None if the SEC answered with a non-success status
        """
        response = await self._get(url)

        if not response.is_success:
            logger.warning(f"Document unavailable ({response.status_code}): {url}")
            return None

        return response.text
