from datetime import date as date_type, datetime
from pydantic import Field, field_validator
from typing import Any, ClassVar, FrozenSet, Optional

from .base import BaseGolfModel


class RoundDraft(BaseGolfModel):
    """A candidate round awaiting user confirmation.

    Produced by the extraction client and the bulk parser. Course may still
    be blank here; it is checked when the draft is confirmed.
    """
    date: date_type
    time: Optional[str] = None
    course: str = ""
    green_fee: float = Field(0.0, allow_inf_nan=False)
    caddy_fee: float = Field(0.0, allow_inf_nan=False)
    wagers: float = Field(0.0, allow_inf_nan=False)
    score: int = Field(0, ge=0)
    raw_input: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def _strip_time_component(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return value.date()
        return value

    @field_validator("time", mode="before")
    @classmethod
    def _normalize_time(cls, value: Any) -> Any:
        if value is None or value == "":
            return None
        try:
            parsed = datetime.strptime(str(value).strip(), "%H:%M")
        except ValueError:
            raise ValueError(f"Time must be HH:MM, got {value!r}")
        return parsed.strftime("%H:%M")

    @field_validator("green_fee", "caddy_fee", mode="before")
    @classmethod
    def _fees_are_positive(cls, value: Any) -> Any:
        # Fees are always recorded as amounts paid; the sign is presentation only.
        if value is None:
            return 0.0
        return abs(float(value))

    @field_validator("wagers", mode="before")
    @classmethod
    def _default_wagers(cls, value: Any) -> Any:
        return 0.0 if value is None else value

    @field_validator("score", mode="before")
    @classmethod
    def _default_score(cls, value: Any) -> Any:
        return 0 if value is None else value

    def get_spending(self) -> float:
        """Green fee plus caddy fee."""
        return self.green_fee + self.caddy_fee

    def get_pnl(self) -> float:
        """Wagers minus spending (signed)."""
        return self.wagers - self.get_spending()

    def confirmation_error(self) -> Optional[str]:
        """Return why this draft cannot be saved yet, or None if it can."""
        if not self.course or not self.course.strip():
            return "Course is required"
        return None

    def editable_fields(self) -> dict:
        """User-editable fields as a plain dict, ready for the store."""
        return self.model_dump(include=set(RoundDraft.model_fields))


class Round(RoundDraft):
    """A confirmed round as persisted by the record store."""
    READ_ONLY_FIELDS: ClassVar[FrozenSet[str]] = frozenset({"id", "created_at"})

    id: str
    created_at: Optional[datetime] = None

    @field_validator("course")
    @classmethod
    def _course_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Course is required")
        return value
