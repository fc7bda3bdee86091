from fastapi import HTTPException, Request

from models import FailureKind, Result
from services import RoundService

_STATUS_BY_KIND = {
    FailureKind.VALIDATION: 400,
    FailureKind.NOT_FOUND: 404,
    FailureKind.REMOTE: 502,
}


def get_service(request: Request) -> RoundService:
    """FastAPI dependency that provides the RoundService."""
    return request.app.state.round_service


def unwrap(result: Result):
    """Return a Success's data, or raise the HTTPException matching the Failure."""
    if result.success:
        return result.data
    raise HTTPException(_STATUS_BY_KIND.get(result.kind, 500), result.error)
