"""API request and response models."""

from datetime import date as date_type, datetime
from pydantic import BaseModel, Field
from typing import List, Optional

from models import Round, RoundDraft


class TextInput(BaseModel):
    """Free text typed or pasted by the user."""
    text: str = Field(..., max_length=20000)


class CreatedResponse(BaseModel):
    id: str


class BulkSaveRequest(BaseModel):
    rounds: List[RoundDraft]


class UpdateRoundRequest(BaseModel):
    """Edited fields of a round; fields left out keep their stored value."""
    date: Optional[date_type] = None
    time: Optional[str] = None
    course: Optional[str] = None
    green_fee: Optional[float] = None
    caddy_fee: Optional[float] = None
    wagers: Optional[float] = None
    score: Optional[int] = None


class RoundSummaryResponse(BaseModel):
    """Round as shown in the history table (no raw input)."""
    id: str
    date: date_type
    time: Optional[str] = None
    course: str
    green_fee: float
    caddy_fee: float
    wagers: float
    score: int
    pnl: float
    created_at: Optional[datetime] = None


def summarize_round(r: Round) -> RoundSummaryResponse:
    """Project a Round into the table row shape."""
    return RoundSummaryResponse(
        id=r.id,
        date=r.date,
        time=r.time,
        course=r.course,
        green_fee=r.green_fee,
        caddy_fee=r.caddy_fee,
        wagers=r.wagers,
        score=r.score,
        pnl=r.get_pnl(),
        created_at=r.created_at,
    )
