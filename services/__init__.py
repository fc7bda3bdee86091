from .protocols import ExtractionClient, RoundStore
from .round_service import BulkSaveResult, RoundService

__all__ = ["BulkSaveResult", "ExtractionClient", "RoundService", "RoundStore"]
