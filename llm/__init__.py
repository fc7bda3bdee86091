from .round_extractor import (
    GeminiRoundExtractor,
    UnconfiguredExtractor,
    build_draft,
    create_client,
)
from .prompts import DEFAULT_COURSE_ALIASES, RawRoundExtraction, build_extraction_prompt

__all__ = [
    "GeminiRoundExtractor",
    "UnconfiguredExtractor",
    "build_draft",
    "create_client",
    "DEFAULT_COURSE_ALIASES",
    "RawRoundExtraction",
    "build_extraction_prompt",
]
