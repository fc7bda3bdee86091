"""Round workflows: extract, bulk parse, confirm and save, edit, delete, report.

The store and extraction clients are passed in by the caller, so tests and
alternative backends can substitute their own.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from analytics.stats import available_periods, compute_statistics
from models import (
    Failure,
    FailureKind,
    Result,
    Round,
    RoundDraft,
    StatisticsSnapshot,
    Success,
    TimePeriod,
)
from parsing.bulk_parser import BulkParseResult, parse_bulk_text
from services.protocols import ExtractionClient, RoundStore

logger = logging.getLogger(__name__)

EMPTY_INPUT_ERROR = "Please describe your round"


class BulkSaveResult(BaseModel):
    """Ids of rounds written by a bulk save, in input order."""
    ids: List[str] = Field(default_factory=list)
    saved: int = 0


class RoundService:
    """Workflows over one store and one extraction client."""

    def __init__(self, store: RoundStore, extractor: ExtractionClient):
        self._store = store
        self._extractor = extractor

    # ================================================================
    # Input
    # ================================================================

    async def extract(self, text: str) -> Result[RoundDraft]:
        """Single-round mode: free text -> draft for the user to confirm."""
        if not text or not text.strip():
            return Failure(error=EMPTY_INPUT_ERROR, kind=FailureKind.VALIDATION)
        result = await self._extractor.extract(text.strip())
        if not result.success:
            logger.warning("Extraction failed: %s", result.error)
        return result

    def parse_bulk(self, text: str, *, today: Optional[date] = None) -> Result[BulkParseResult]:
        """Bulk mode: one round per line -> drafts for the user to confirm."""
        return parse_bulk_text(text, today=today)

    # ================================================================
    # Writes
    # ================================================================

    async def save(self, draft: RoundDraft) -> Result[str]:
        """Persist one confirmed draft."""
        error = draft.confirmation_error()
        if error:
            return Failure(error=error, kind=FailureKind.VALIDATION)
        return await self._store.create(draft)

    async def save_many(self, drafts: List[RoundDraft]) -> Result[BulkSaveResult]:
        """
        Persist drafts one at a time, in order.

        Every draft is checked before anything is written. A store failure
        stops the loop; rounds already written stay written.
        """
        if not drafts:
            return Failure(error="No rounds to save", kind=FailureKind.VALIDATION)
        for index, draft in enumerate(drafts, start=1):
            error = draft.confirmation_error()
            if error:
                return Failure(error=f"Round {index}: {error}", kind=FailureKind.VALIDATION)

        ids: List[str] = []
        for draft in drafts:
            result = await self._store.create(draft)
            if not result.success:
                logger.warning(
                    "Bulk save stopped after %d of %d rounds: %s",
                    len(ids), len(drafts), result.error,
                )
                return Failure(
                    error=f"Saved {len(ids)} of {len(drafts)} rounds before an error: {result.error}"
                )
            ids.append(result.data)
        return Success(data=BulkSaveResult(ids=ids, saved=len(ids)))

    async def edit(self, round_id: str, changes: Dict[str, Any]) -> Result[Round]:
        """Apply user corrections to a stored round and write all editable fields back."""
        current = await self._store.get(round_id)
        if not current.success:
            return current

        edited = current.data.model_copy()
        for field_name, value in changes.items():
            error = edited.update_field(field_name, value)
            if error:
                return Failure(error=f"{field_name}: {error}", kind=FailureKind.VALIDATION)

        error = edited.confirmation_error()
        if error:
            return Failure(error=error, kind=FailureKind.VALIDATION)

        result = await self._store.update(round_id, edited.editable_fields())
        if not result.success:
            return result
        return Success(data=edited)

    async def delete(self, round_id: str) -> Result[None]:
        return await self._store.delete(round_id)

    # ================================================================
    # Reads
    # ================================================================

    async def list_rounds(self) -> Result[List[Round]]:
        return await self._store.list()

    async def get_round(self, round_id: str) -> Result[Round]:
        return await self._store.get(round_id)

    async def statistics(
        self, period: Optional[TimePeriod] = None, *, today: Optional[date] = None
    ) -> Result[StatisticsSnapshot]:
        """Re-read every round and recompute the snapshot for ``period``."""
        rounds = await self._store.list()
        if not rounds.success:
            return rounds
        return Success(data=compute_statistics(rounds.data, period, today=today))

    async def periods(self) -> Result[List[str]]:
        """Month keys that have rounds, for the period selector."""
        rounds = await self._store.list()
        if not rounds.success:
            return rounds
        return Success(data=available_periods(rounds.data))
