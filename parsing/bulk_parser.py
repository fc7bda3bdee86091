"""Parse pasted multi-line text into round drafts.

One round per line, comma-separated in a fixed order::

    date, course, green_fee, caddy_fee, wagers[, score]

Lines that start with ``#`` or ``**`` or that contain ``Total:`` are treated
as headers/summaries and skipped, as are lines with fewer than five fields.
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime, time
from typing import List, Optional

from dateutil import parser as date_parser
from pydantic import BaseModel, Field

from models import Failure, FailureKind, Result, RoundDraft, Success

logger = logging.getLogger(__name__)

PLACEHOLDER_TIME = "00:00"
MIN_FIELDS = 5
SKIP_PREFIXES = ("#", "**")
SKIP_TOKEN = "Total:"
NO_ROUNDS_ERROR = "No valid rounds found"


class BulkParseResult(BaseModel):
    """Drafts produced from one paste, in input order."""
    rounds: List[RoundDraft] = Field(default_factory=list)
    count: int = 0


def _is_skippable(line: str) -> bool:
    return not line or line.startswith(SKIP_PREFIXES) or SKIP_TOKEN in line


def _parse_date(text: str, today: date) -> date:
    """Best-effort date parsing; unparseable text falls back to ``today``."""
    cleaned = text.strip()
    if cleaned:
        try:
            return date_parser.parse(cleaned, default=datetime.combine(today, time.min)).date()
        except (ValueError, OverflowError) as exc:
            logger.warning("Unparseable date %r, using %s instead: %s", cleaned, today, exc)
            return today
    logger.warning("Missing date, using %s instead", today)
    return today


def _parse_amount(text: str, field_name: str) -> float:
    try:
        amount = float(text)
    except ValueError:
        logger.warning("Non-numeric %s %r, using 0", field_name, text)
        return 0.0
    if not math.isfinite(amount):
        logger.warning("Non-finite %s %r, using 0", field_name, text)
        return 0.0
    return amount


def _parse_score(parts: List[str]) -> int:
    if len(parts) <= MIN_FIELDS:
        logger.warning("No score given, using 0")
        return 0
    text = parts[MIN_FIELDS]
    try:
        score = int(text)
    except ValueError:
        logger.warning("Non-numeric score %r, using 0", text)
        return 0
    if score < 0:
        logger.warning("Negative score %r, using 0", text)
        return 0
    return score


def parse_line(line: str, today: Optional[date] = None) -> Optional[RoundDraft]:
    """Parse one trimmed line; None if it is not a round."""
    if _is_skippable(line):
        return None

    parts = [part.strip() for part in line.split(",")]
    if len(parts) < MIN_FIELDS:
        logger.debug("Skipping line with %d fields: %r", len(parts), line)
        return None

    today = today or date.today()
    return RoundDraft(
        date=_parse_date(parts[0], today),
        time=PLACEHOLDER_TIME,
        course=parts[1],
        green_fee=abs(_parse_amount(parts[2], "green fee")),
        caddy_fee=abs(_parse_amount(parts[3], "caddy fee")),
        wagers=_parse_amount(parts[4], "wagers"),
        score=_parse_score(parts),
        raw_input=line,
    )


def parse_bulk_text(text: str, *, today: Optional[date] = None) -> Result[BulkParseResult]:
    """Turn a multi-line paste into round drafts.

    Returns a Failure only when no line yields a round.
    """
    today = today or date.today()
    rounds: List[RoundDraft] = []
    for raw_line in (text or "").splitlines():
        draft = parse_line(raw_line.strip(), today)
        if draft is not None:
            rounds.append(draft)

    if not rounds:
        return Failure(error=NO_ROUNDS_ERROR, kind=FailureKind.VALIDATION)

    logger.info("Parsed %d rounds from bulk input", len(rounds))
    return Success(data=BulkParseResult(rounds=rounds, count=len(rounds)))
