"""Round API endpoints."""

from typing import List

from fastapi import APIRouter, Depends

from api.dependencies import get_service, unwrap
from api.schemas import (
    BulkSaveRequest,
    CreatedResponse,
    RoundSummaryResponse,
    TextInput,
    UpdateRoundRequest,
    summarize_round,
)
from models import RoundDraft
from parsing import BulkParseResult
from services import BulkSaveResult, RoundService

router = APIRouter()


@router.get("", response_model=List[RoundSummaryResponse])
async def list_rounds(service: RoundService = Depends(get_service)):
    rounds = unwrap(await service.list_rounds())
    return [summarize_round(r) for r in rounds]


@router.post("", response_model=CreatedResponse, status_code=201)
async def create_round(draft: RoundDraft, service: RoundService = Depends(get_service)):
    """Save one confirmed round."""
    return CreatedResponse(id=unwrap(await service.save(draft)))


@router.post("/bulk/parse", response_model=BulkParseResult)
async def parse_bulk(req: TextInput, service: RoundService = Depends(get_service)):
    """Parse pasted lines into drafts for review. Nothing is saved."""
    return unwrap(service.parse_bulk(req.text))


@router.post("/bulk", response_model=BulkSaveResult, status_code=201)
async def save_bulk(req: BulkSaveRequest, service: RoundService = Depends(get_service)):
    """Save confirmed drafts one by one, stopping at the first failure."""
    return unwrap(await service.save_many(req.rounds))


@router.get("/{round_id}", response_model=RoundSummaryResponse)
async def get_round(round_id: str, service: RoundService = Depends(get_service)):
    return summarize_round(unwrap(await service.get_round(round_id)))


@router.put("/{round_id}", response_model=RoundSummaryResponse)
async def update_round(
    round_id: str,
    req: UpdateRoundRequest,
    service: RoundService = Depends(get_service),
):
    """Edit an existing round's fields."""
    updated = unwrap(await service.edit(round_id, req.model_dump(exclude_unset=True)))
    return summarize_round(updated)


@router.delete("/{round_id}", status_code=204)
async def delete_round(round_id: str, service: RoundService = Depends(get_service)):
    unwrap(await service.delete(round_id))
