"""Conversion between asyncpg rows and the Round model.

The store keeps dates in a DATE column and money in NUMERIC columns;
everything above this module sees ``date`` and ``float``.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from models import Round, RoundDraft

# Model field -> ledger.rounds column
FIELD_COLUMNS: Dict[str, str] = {
    "date": "round_date",
    "time": "tee_time",
    "course": "course",
    "green_fee": "green_fee",
    "caddy_fee": "caddy_fee",
    "wagers": "wagers",
    "score": "score",
    "raw_input": "raw_input",
}


def _to_float(value: Optional[Decimal]) -> float:
    return float(value) if value is not None else 0.0


def _to_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        return date.fromisoformat(value[:10])
    return value


# ================================================================
# Row -> Model (reads)
# ================================================================

def round_from_row(row) -> Round:
    """ledger.rounds row -> Round model."""
    return Round(
        id=str(row["id"]),
        date=row["round_date"],
        time=row["tee_time"],
        course=row["course"],
        green_fee=_to_float(row["green_fee"]),
        caddy_fee=_to_float(row["caddy_fee"]),
        wagers=_to_float(row["wagers"]),
        score=row["score"] if row["score"] is not None else 0,
        raw_input=row["raw_input"],
        created_at=row["created_at"],
    )


# ================================================================
# Model -> Row dict (writes)
# ================================================================

def round_to_row(draft: RoundDraft) -> dict:
    """RoundDraft -> dict for ledger.rounds INSERT."""
    return {
        "round_date": draft.date,
        "tee_time": draft.time,
        "course": draft.course.strip(),
        "green_fee": draft.green_fee,
        "caddy_fee": draft.caddy_fee,
        "wagers": draft.wagers,
        "score": draft.score,
        "raw_input": draft.raw_input,
    }


def fields_to_columns(fields: Dict[str, Any]) -> dict:
    """Editable model fields -> column values for UPDATE. Unknown keys are dropped."""
    columns = {}
    for name, value in fields.items():
        column = FIELD_COLUMNS.get(name)
        if column is None:
            continue
        if name == "date":
            value = _to_date(value)
        elif name == "course" and isinstance(value, str):
            value = value.strip()
        columns[column] = value
    return columns
