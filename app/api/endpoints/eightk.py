"""
8-K digest endpoint
Supports ?symbol=TSLA or ?symbol=AAPL,TSLA,NVDA and ?days=1..30
"""
from typing import Optional
import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.api import deps
from app.schemas.eightk import DigestError
from app.services.eightk_digest import EightKDigestService, parse_symbols
from app.services.filing_index import clamp_days
from app.services.sec_client import SECClientError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def get_eightk_digest(
    symbol: Optional[str] = Query(None, description="Comma-separated ticker list, e.g. AAPL,TSLA"),
    days: Optional[str] = Query(None, description="Look-back window in days, clamped to 1-30"),
    service: EightKDigestService = Depends(deps.get_digest_service)
):
    """
    Get recent 8-K filings with extracted Items and a Chinese summary

    An unknown ticker yields an ok=false entry for that symbol only; a
    failure to load the SEC ticker map fails the whole request.
    """
    symbols = parse_symbols(symbol)
    window = clamp_days(days)

    try:
        digest = await service.build_digest(symbols, window)
    except SECClientError as e:
        logger.error(f"8-K digest failed: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=DigestError(error=str(e)).model_dump()
        )

    return JSONResponse(status_code=200, content=digest.to_payload())
