from __future__ import annotations

from typing import Any, Dict, List, Protocol

from models import Result, Round, RoundDraft


class RoundStore(Protocol):
    """Interface for round persistence.

    Implementors provide the actual storage. Any class with matching method
    signatures satisfies this protocol; every method returns a Result.
    """

    async def create(self, draft: RoundDraft) -> Result[str]:
        """Persist a confirmed draft and return the new id."""
        ...

    async def list(self) -> Result[List[Round]]:
        """All rounds ordered by date, newest first."""
        ...

    async def get(self, round_id: str) -> Result[Round]:
        ...

    async def update(self, round_id: str, fields: Dict[str, Any]) -> Result[None]:
        ...

    async def delete(self, round_id: str) -> Result[None]:
        ...


class ExtractionClient(Protocol):
    """Interface for turning free text into a round draft."""

    async def extract(self, text: str) -> Result[RoundDraft]:
        ...
