"""Natural-language extraction endpoint."""

from fastapi import APIRouter, Depends

from api.dependencies import get_service, unwrap
from api.schemas import TextInput
from models import RoundDraft
from services import RoundService

router = APIRouter()


@router.post("", response_model=RoundDraft)
async def extract_round(req: TextInput, service: RoundService = Depends(get_service)):
    """Turn a free-text description into a draft for the user to review.

    Nothing is saved; the confirmed draft is posted to /api/rounds.
    """
    return unwrap(await service.extract(req.text))
