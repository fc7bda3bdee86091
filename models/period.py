from __future__ import annotations

import re
from datetime import date
from enum import Enum
from pydantic import Field
from typing import Optional

from .base import BaseGolfModel
from .result import Failure, FailureKind, Result, Success

_MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


class PeriodKind(str, Enum):
    """Which slice of history a dashboard is looking at."""
    ALL = "all"
    YTD = "ytd"
    MONTH = "month"


class TimePeriod(BaseGolfModel):
    """Time Period Selector: all-time, year-to-date, or one calendar month."""
    kind: PeriodKind = PeriodKind.ALL
    year: Optional[int] = Field(None, ge=1900, le=9999)
    month: Optional[int] = Field(None, ge=1, le=12)

    @classmethod
    def all_time(cls) -> "TimePeriod":
        return cls(kind=PeriodKind.ALL)

    @classmethod
    def year_to_date(cls) -> "TimePeriod":
        return cls(kind=PeriodKind.YTD)

    @classmethod
    def for_month(cls, year: int, month: int) -> "TimePeriod":
        return cls(kind=PeriodKind.MONTH, year=year, month=month)

    @classmethod
    def parse(cls, value: Optional[str]) -> Result["TimePeriod"]:
        """Parse ``all``, ``ytd`` or ``YYYY-MM``."""
        text = (value or PeriodKind.ALL.value).strip().lower()
        if text == PeriodKind.ALL.value:
            return Success(data=cls.all_time())
        if text == PeriodKind.YTD.value:
            return Success(data=cls.year_to_date())

        match = _MONTH_PATTERN.match(text)
        if match:
            year, month = int(match.group(1)), int(match.group(2))
            if 1 <= month <= 12:
                return Success(data=cls.for_month(year, month))
        return Failure(
            error=f"Invalid period {value!r}: use 'all', 'ytd' or 'YYYY-MM'",
            kind=FailureKind.VALIDATION,
        )

    @property
    def is_single_month(self) -> bool:
        return self.kind == PeriodKind.MONTH

    def contains(self, day: date, today: Optional[date] = None) -> bool:
        """Whether a round played on ``day`` falls inside this period."""
        if self.kind == PeriodKind.ALL:
            return True
        if self.kind == PeriodKind.YTD:
            today = today or date.today()
            return day >= date(today.year, 1, 1)
        return day.year == self.year and day.month == self.month

    def label(self) -> str:
        if self.kind == PeriodKind.MONTH:
            return f"{self.year:04d}-{self.month:02d}"
        return self.kind.value
