# app/services/eightk_digest.py
"""
8-K Digest Service

Per request: ticker map -> per symbol submissions -> per filing document,
text, items and summary. Failures are stratified:
- ticker map failure aborts the request (SECClientError propagates)
- unknown ticker / submissions failure becomes a per-symbol error entry
- any failure on a single filing becomes a SkippedFiling and the filing is
  left out of the payload
Symbols and filings are processed sequentially; output order follows input
symbol order and filing index order.
"""
from typing import Dict, List, Optional, Union
from datetime import datetime, timezone
import logging

from app.core.config import settings
from app.schemas.eightk import (
    DigestResponse,
    FilingDigest,
    FilingReference,
    SkippedFiling,
    SymbolDigest,
    SymbolError,
    SymbolResult,
)
from app.services.filing_index import clamp_days, filter_recent_filings
from app.services.sec_client import SECClient, SECClientError
from app.services.summary_renderer import render_summary
from app.services.text_extractor import TextExtractor, text_extractor

logger = logging.getLogger(__name__)


def parse_symbols(raw: Optional[str], default: Optional[str] = None) -> List[str]:
    """Split "aapl, TSLA,,nvda" into ["AAPL", "TSLA", "NVDA"]"""
    raw = raw or default or settings.DEFAULT_SYMBOL
    return [s.strip() for s in raw.upper().split(",") if s.strip()]


class EightKDigestService:
    """Builds the 8-K digest payload for a list of ticker symbols"""

    def __init__(
        self,
        client: SECClient,
        extractor: TextExtractor = text_extractor,
        form_prefix: str = "8-K",
    ):
        self.client = client
        self.extractor = extractor
        self.form_prefix = form_prefix

    async def build_digest(
        self,
        symbols: List[str],
        days: int = 1,
        now: Optional[datetime] = None,
    ) -> DigestResponse:
        """
        Raises:
            SECClientError: if the ticker map cannot be loaded
        """
        days = clamp_days(days)
        now = now or datetime.now(timezone.utc)

        logger.info(f"Building 8-K digest for {symbols} (last {days} day(s))")
        ticker_map = await self.client.fetch_ticker_map()

        results: List[SymbolResult] = []
        for symbol in symbols:
            results.append(await self.digest_symbol(symbol, ticker_map, days, now))

        return DigestResponse(updated_at=datetime.now(timezone.utc), results=results)

    async def digest_symbol(
        self,
        symbol: str,
        ticker_map: Dict[str, str],
        days: int,
        now: Optional[datetime] = None,
    ) -> SymbolResult:
        cik = ticker_map.get(symbol)
        if not cik:
            logger.warning(f"No CIK found for {symbol}")
            return SymbolError(symbol=symbol, error=f"找不到 {symbol} 的 CIK")

        try:
            submissions = await self.client.fetch_submissions(cik)
        except SECClientError as e:
            return SymbolError(symbol=symbol, error=str(e))

        try:
            filings = filter_recent_filings(
                submissions,
                days,
                form_prefix=self.form_prefix,
                now=now,
                cik=cik,
                archive_url=self.client.archive_url,
            )
        except Exception as e:
            logger.warning(f"Unreadable submissions for {symbol} (CIK {cik}): {e}")
            return SymbolError(symbol=symbol, error=f"Invalid submissions data for CIK {cik}")

        digests = []
        skipped = []
        for filing in filings:
            outcome = await self.digest_filing(symbol, filing, days)
            if isinstance(outcome, SkippedFiling):
                skipped.append(outcome)
            else:
                digests.append(outcome)

        logger.info(
            f"{symbol} (CIK {cik}): {len(digests)} filings digested, {len(skipped)} skipped"
        )
        return SymbolDigest(
            symbol=symbol,
            cik=cik,
            days=days,
            count=len(digests),
            filings=digests,
            skipped=skipped,
        )

    async def digest_filing(
        self,
        symbol: str,
        filing: FilingReference,
        days: int,
    ) -> Union[FilingDigest, SkippedFiling]:
        try:
            html = await self.client.fetch_document(filing.doc_url)
            if html is None:
                return SkippedFiling(doc_url=filing.doc_url, reason="document unavailable")

            text = self.extractor.html_to_text(html)
            items = self.extractor.extract_items(text)
            summary = render_summary(symbol, filing, items, days)

            return FilingDigest(
                **filing.model_dump(),
                items=items,
                summary=summary,
            )
        except Exception as e:
            logger.warning(f"Skipping {filing.doc_url}: {e}")
            return SkippedFiling(doc_url=filing.doc_url, reason=str(e) or type(e).__name__)
