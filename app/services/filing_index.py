# app/services/filing_index.py
"""
Filing index filtering

Turns the parallel arrays of a submissions document into FilingReference
objects for one form family inside a trailing window of days.
"""
import re
from typing import Dict, List, Optional, Union
from datetime import datetime, timedelta, timezone
import logging

from app.core.config import settings
from app.schemas.eightk import FilingReference

logger = logging.getLogger(__name__)

MIN_DAYS = 1

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def clamp_days(raw: Union[str, int, None], default: Optional[int] = None) -> int:
    """
    Parse a day-count query value and clamp it to [1, MAX_DAYS]

    Only the leading integer is read ("7d" -> 7). Missing or unparseable
    values fall back to the default.
    """
    if default is None:
        default = settings.DEFAULT_DAYS

    if isinstance(raw, int):
        value = raw
    else:
        match = _LEADING_INT.match(str(raw)) if raw is not None else None
        value = int(match.group(1)) if match else default

    return min(settings.MAX_DAYS, max(MIN_DAYS, value))


def _parse_filing_date(value) -> Optional[datetime]:
    try:
        return datetime.strptime(str(value), "%Y-%m-%d").replace(tzinfo=timezone.utc)
    except ValueError:
        return None


def _cik_number(*candidates) -> int:
    for candidate in candidates:
        try:
            return int(str(candidate))
        except ValueError:
            continue
    return 0


def _at(values: List, index: int, default=""):
    return values[index] if index < len(values) and values[index] is not None else default


def filter_recent_filings(
    submissions: Dict,
    days: int = 1,
    form_prefix: str = "8-K",
    now: Optional[datetime] = None,
    cik: Optional[str] = None,
    archive_url: str = "https://www.sec.gov/Archives/edgar/data",
) -> List[FilingReference]:
    """
    Select recent filings of one form family from a submissions document

    Args:
        submissions: Parsed data.sec.gov submissions JSON
        days: Trailing window, clamped to [1, MAX_DAYS]
        form_prefix: Case-insensitive form prefix ("8-K" also matches "8-K/A")
        now: Reference time (UTC); defaults to the current time
        cik: Fallback CIK when the document does not carry one
        archive_url: EDGAR Archives base used to build document URLs

    Returns:
        FilingReference list in the order of the submissions document
    """
    if not isinstance(submissions, dict):
        return []

    filings_section = submissions.get("filings")
    recent = filings_section.get("recent") if isinstance(filings_section, dict) else None
    if not isinstance(recent, dict) or not recent:
        return []

    days = clamp_days(days)
    now = now or datetime.now(timezone.utc)
    # Filing dates are midnight UTC; a filing exactly at the cutoff is kept
    cutoff = now - timedelta(days=days)

    forms = recent.get("form") or []
    filing_dates = recent.get("filingDate") or []
    report_dates = recent.get("reportDate") or []
    accession_numbers = recent.get("accessionNumber") or []
    primary_documents = recent.get("primaryDocument") or []

    cik_number = _cik_number(submissions.get("cik"), cik)
    prefix = form_prefix.upper()
    base_url = archive_url.rstrip("/")

    filings = []
    for i in range(len(forms)):
        form = str(_at(forms, i))
        if not form.upper().startswith(prefix):
            continue

        filing_date = _at(filing_dates, i)
        filed_at = _parse_filing_date(filing_date)
        if filed_at is None or filed_at < cutoff:
            continue

        accession = str(_at(accession_numbers, i)).replace("-", "")
        primary = _at(primary_documents, i)
        if not accession or not primary:
            logger.debug(f"Skipping {form} filed {filing_date}: missing accession or primary document")
            continue

        filings.append(FilingReference(
            form=form,
            filing_date=filing_date,
            report_date=_at(report_dates, i) or "",
            doc_url=f"{base_url}/{cik_number}/{accession}/{primary}",
        ))

    logger.debug(f"CIK {cik_number}: {len(filings)} {form_prefix} filings in the last {days} day(s)")
    return filings
