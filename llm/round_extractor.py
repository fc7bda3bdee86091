from __future__ import annotations

import asyncio
import logging
import os
import re
from datetime import date, datetime
from typing import Callable, List, Mapping, Optional

from pydantic import ValidationError

from dotenv import load_dotenv
load_dotenv()

from google import genai
from google.genai import types

from models import Failure, Result, RoundDraft, Success
from llm.prompts import RawRoundExtraction, build_extraction_prompt

logger = logging.getLogger(__name__)


# --- Configuration ---

GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.5-flash")
TEMPERATURE = 0.1
MAX_OUTPUT_TOKENS = 500

INVALID_FORMAT_ERROR = "AI returned invalid data format"
GENERIC_ERROR = "Failed to process input"

_CODE_FENCE = re.compile(r"```(?:json)?\n?|\n?```")


# --- API Interaction ---

def create_client(api_key: Optional[str] = None) -> genai.Client:
    api_key = api_key or os.environ.get("GOOGLE_API_KEY")
    if not api_key:
        raise EnvironmentError(
            "GOOGLE_API_KEY environment variable is not set. "
            "Get an API key at https://aistudio.google.com/apikey"
        )
    return genai.Client(api_key=api_key)


def _strip_code_fences(text: str) -> str:
    return _CODE_FENCE.sub("", text or "").strip()


# --- Transformation: Raw LLM output -> RoundDraft ---

def _parse_date(date_str: Optional[str], today: date) -> date:
    """Parse a YYYY-MM-DD date string, falling back to today."""
    if not date_str:
        return today
    try:
        return datetime.strptime(date_str.strip(), "%Y-%m-%d").date()
    except ValueError:
        logger.warning("Model returned unparseable date %r, using %s", date_str, today)
        return today


def _parse_time(time_str: Optional[str], now: datetime) -> str:
    """Normalize HH:MM, falling back to the current time of day."""
    if time_str:
        try:
            return datetime.strptime(time_str.strip(), "%H:%M").strftime("%H:%M")
        except ValueError:
            logger.warning("Model returned unparseable time %r, using current time", time_str)
    return now.strftime("%H:%M")


def build_draft(raw: RawRoundExtraction, user_input: str, now: datetime) -> RoundDraft:
    """Fill nulls with defaults and wrap the result as a draft for review."""
    if raw.score is None:
        logger.warning("Model returned no score, using 0")
    elif raw.score < 0:
        logger.warning("Model returned negative score %d, using 0", raw.score)
    return RoundDraft(
        date=_parse_date(raw.date, now.date()),
        time=_parse_time(raw.time, now),
        course=raw.course or "",
        green_fee=raw.green_fee or 0,
        caddy_fee=raw.caddy_fee or 0,
        wagers=raw.wagers or 0,
        score=max(raw.score or 0, 0),
        raw_input=user_input,
    )


# --- Clients ---

class GeminiRoundExtractor:
    """Turns a free-text description of a round into a RoundDraft via Gemini.

    The genai client is passed in by the caller; use create_client() to
    build one from GOOGLE_API_KEY.
    """

    def __init__(
        self,
        client: genai.Client,
        *,
        model: str = GEMINI_MODEL,
        course_aliases: Optional[Mapping[str, List[str]]] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._client = client
        self._model = model
        self._course_aliases = course_aliases
        self._clock = clock

    def _generate(self, text: str, today: date) -> str:
        response = self._client.models.generate_content(
            model=self._model,
            contents=text,
            config=types.GenerateContentConfig(
                system_instruction=build_extraction_prompt(today, self._course_aliases),
                response_mime_type="application/json",
                response_json_schema=RawRoundExtraction.model_json_schema(),
                temperature=TEMPERATURE,
                max_output_tokens=MAX_OUTPUT_TOKENS,
            ),
        )
        return response.text

    async def extract(self, text: str) -> Result[RoundDraft]:
        now = self._clock()
        loop = asyncio.get_running_loop()
        try:
            content = await loop.run_in_executor(None, self._generate, text, now.date())
        except Exception as e:
            logger.exception("Gemini extraction call failed")
            return Failure(error=str(e) or GENERIC_ERROR)

        try:
            raw = RawRoundExtraction.model_validate_json(_strip_code_fences(content))
            draft = build_draft(raw, text, now)
        except (ValidationError, ValueError) as e:
            logger.error("Failed to parse model response %r: %s", content, e)
            return Failure(error=INVALID_FORMAT_ERROR)

        return Success(data=draft)


class UnconfiguredExtractor:
    """Placeholder used when no API key is available. Always fails."""

    def __init__(self, reason: str = "Text extraction is not configured"):
        self._reason = reason

    async def extract(self, text: str) -> Result[RoundDraft]:
        return Failure(error=self._reason)
