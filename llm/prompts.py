from datetime import date
from pydantic import BaseModel, Field
from typing import Dict, List, Mapping, Optional


# ================================================================
# Raw LLM response model
# ================================================================

class RawRoundExtraction(BaseModel):
    """Exactly what the model is asked to return. Any field may be null."""
    date: Optional[str] = None
    time: Optional[str] = None
    course: Optional[str] = None
    green_fee: Optional[float] = Field(None, allow_inf_nan=False)
    caddy_fee: Optional[float] = Field(None, allow_inf_nan=False)
    wagers: Optional[float] = Field(None, allow_inf_nan=False)
    score: Optional[int] = None


# ================================================================
# Course names
# ================================================================

# Canonical course name -> spellings the player actually types.
DEFAULT_COURSE_ALIASES: Dict[str, List[str]] = {
    "牧马山": ["mumashan", "牧马山", "home course", "home"],
    "麓山": ["lushan", "麓山"],
    "青城山": ["qingchengshan", "青城山"],
    "观岭": ["guanling", "观岭"],
    "保利": ["baoli", "保利"],
}

# ================================================================
# Shared prompt fragments
# ================================================================

_PREAMBLE = """You are a golf data extraction assistant. Extract the following information from the user's description of a round of golf."""

_JSON_SCHEMA = """
Return ONLY a raw JSON object (no markdown, no code blocks) with this exact structure:
{
  "date": "ISO date string (YYYY-MM-DD), default to today if not specified",
  "time": "HH:MM format (24-hour), null if not specified",
  "course": "golf course name",
  "green_fee": number (null if not specified),
  "caddy_fee": number (null if not specified),
  "wagers": number (positive for winnings, negative for losses, null if not specified),
  "score": number (golf score, null if not specified)
}"""

_MISSING_RULE = """
If any information is missing or unclear, use null for that field."""


def _course_instructions(aliases: Mapping[str, List[str]]) -> str:
    if not aliases:
        return ""
    lines = ["", "Course Name Recognition:"]
    for canonical, spellings in aliases.items():
        lines.append(f"- {canonical}: {', '.join(spellings)}")
    lines.append(
        f"Always normalize course names to one of: {', '.join(aliases)}. "
        "Keep any other course name as written."
    )
    return "\n".join(lines)


def build_extraction_prompt(
    today: date,
    course_aliases: Optional[Mapping[str, List[str]]] = None,
) -> str:
    """System prompt for turning one free-text description into a round."""
    aliases = DEFAULT_COURSE_ALIASES if course_aliases is None else course_aliases
    return "\n".join([
        _PREAMBLE,
        _JSON_SCHEMA,
        _course_instructions(aliases),
        _MISSING_RULE,
        f"Today's date is {today.isoformat()}.",
    ])
