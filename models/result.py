"""Success / failure values returned across component boundaries.

Every fallible operation returns one of these instead of raising, and
callers branch on ``result.success``.
"""

from enum import Enum
from typing import Generic, Literal, Optional, TypeVar, Union

from pydantic import BaseModel

T = TypeVar("T")


class FailureKind(str, Enum):
    """Why an operation failed; lets callers pick a response."""
    VALIDATION = "validation"  # bad user input, nothing was changed
    NOT_FOUND = "not_found"
    REMOTE = "remote"          # store or model call failed


class Success(BaseModel, Generic[T]):
    success: Literal[True] = True
    data: Optional[T] = None


class Failure(BaseModel):
    success: Literal[False] = False
    error: str
    kind: FailureKind = FailureKind.REMOTE


# Only written in annotations; modules using Result[...] postpone evaluation.
Result = Union[Success[T], Failure]
