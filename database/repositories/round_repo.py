"""CRUD operations for ledger.rounds.

Every public method returns a Success or Failure; database exceptions are
logged here and never reach the caller.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List
from uuid import UUID

import asyncpg

from models import Failure, FailureKind, Result, Round, RoundDraft, Success
from database.converters import fields_to_columns, round_from_row, round_to_row
from database.exceptions import DatabaseError, IntegrityError, NotFoundError

logger = logging.getLogger(__name__)

_DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


def _round_uuid(round_id: str) -> UUID:
    try:
        return UUID(str(round_id))
    except ValueError as e:
        raise NotFoundError(f"Round {round_id} not found") from e


class RoundRepositoryDB:
    """Async CRUD for rounds."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    # ================================================================
    # Private helpers
    # ================================================================

    async def _insert(self, draft: RoundDraft) -> str:
        row_data = round_to_row(draft)
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    """INSERT INTO ledger.rounds
                       (round_date, tee_time, course, green_fee, caddy_fee,
                        wagers, score, raw_input)
                       VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
                       RETURNING id""",
                    row_data["round_date"], row_data["tee_time"], row_data["course"],
                    row_data["green_fee"], row_data["caddy_fee"], row_data["wagers"],
                    row_data["score"], row_data["raw_input"],
                )
        except (asyncpg.CheckViolationError, asyncpg.NotNullViolationError) as e:
            raise IntegrityError(str(e)) from e
        return str(row["id"])

    async def _update(self, round_id: str, fields: Dict[str, Any]) -> None:
        updates = fields_to_columns(fields)
        uid = _round_uuid(round_id)
        if not updates:
            # Nothing to change, but the round still has to exist.
            await self._fetch(round_id)
            return

        set_clause = ", ".join(f"{k} = ${i+2}" for i, k in enumerate(updates))
        values = [uid] + list(updates.values())
        try:
            async with self._pool.acquire() as conn:
                result = await conn.execute(
                    f"UPDATE ledger.rounds SET {set_clause} WHERE id = $1",
                    *values,
                )
        except (asyncpg.CheckViolationError, asyncpg.NotNullViolationError) as e:
            raise IntegrityError(str(e)) from e
        if result != "UPDATE 1":
            raise NotFoundError(f"Round {round_id} not found")

    async def _fetch(self, round_id: str) -> Round:
        uid = _round_uuid(round_id)
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM ledger.rounds WHERE id = $1", uid
            )
        if not row:
            raise NotFoundError(f"Round {round_id} not found")
        return round_from_row(row)

    async def _fetch_all(self) -> List[Round]:
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT * FROM ledger.rounds
                   ORDER BY round_date DESC, created_at DESC"""
            )
        return [round_from_row(r) for r in rows]

    async def _remove(self, round_id: str) -> None:
        uid = _round_uuid(round_id)
        async with self._pool.acquire() as conn:
            result = await conn.execute(
                "DELETE FROM ledger.rounds WHERE id = $1", uid
            )
        if result != "DELETE 1":
            raise NotFoundError(f"Round {round_id} not found")

    @staticmethod
    def _failure(action: str, error: Exception) -> Failure:
        if isinstance(error, NotFoundError):
            logger.info("%s: %s", action, error)
            return Failure(error="Round not found", kind=FailureKind.NOT_FOUND)
        if isinstance(error, IntegrityError):
            logger.warning("%s rejected by the database: %s", action, error)
            return Failure(error=str(error), kind=FailureKind.VALIDATION)
        logger.error("%s failed", action, exc_info=error)
        return Failure(error=str(error) or f"{action} failed")

    # ================================================================
    # Public API
    # ================================================================

    async def create(self, draft: RoundDraft) -> Result[str]:
        """Insert a confirmed round. Returns the new round id."""
        try:
            round_id = await self._insert(draft)
        except (DatabaseError, *_DRIVER_ERRORS) as e:
            return self._failure("Create round", e)
        logger.info("Created round %s (%s on %s)", round_id, draft.course, draft.date)
        return Success(data=round_id)

    async def list(self) -> Result[List[Round]]:
        """All rounds, newest first."""
        try:
            return Success(data=await self._fetch_all())
        except (DatabaseError, *_DRIVER_ERRORS) as e:
            return self._failure("List rounds", e)

    async def get(self, round_id: str) -> Result[Round]:
        try:
            return Success(data=await self._fetch(round_id))
        except (DatabaseError, *_DRIVER_ERRORS) as e:
            return self._failure("Get round", e)

    async def update(self, round_id: str, fields: Dict[str, Any]) -> Result[None]:
        """Overwrite editable fields of a round. id and created_at are never written."""
        try:
            await self._update(round_id, fields)
        except (DatabaseError, *_DRIVER_ERRORS) as e:
            return self._failure("Update round", e)
        logger.info("Updated round %s", round_id)
        return Success()

    async def delete(self, round_id: str) -> Result[None]:
        try:
            await self._remove(round_id)
        except (DatabaseError, *_DRIVER_ERRORS) as e:
            return self._failure("Delete round", e)
        logger.info("Deleted round %s", round_id)
        return Success()
