"""
Mood Summary Service
====================
A short, friendly observation about the user's recent moods, written by
the Claude API.

What leaves the process (and nothing else):
    - each recent record's date, mood label and 1–5 value
    - the average and most common mood over the same window

Notes are never sent. No user identifier is sent.

If the feature is disabled or no API key is configured, a plain summary
is built locally from the same statistics. If the API call fails for
any reason, a fallback message is returned. A summary failure is logged
but never raised to the caller.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, tzinfo
from typing import Optional, Sequence

import httpx

from moody.config import Settings, get_settings
from moody.models.mood import MoodRecord
from moody.services.insights import most_common_mood
from moody.services.records import (
    as_aware,
    filter_since,
    mean_value,
    sort_newest_first,
)

logger = logging.getLogger(__name__)

ANTHROPIC_MESSAGES_URL = "https://api.anthropic.com/v1/messages"

NO_DATA_MESSAGE = (
    "Hey friend! 👋 I don't have any mood data from you yet. "
    "Start logging your moods and I'll give you personalized insights! 🌟"
)
FALLBACK_MESSAGE = "Oops! 😅 I'm having a moment. Try again in a bit, friend! 💫"

_PROMPT_TEMPLATE = """\
Act as a supportive best friend. Analyze this mood history: [{history}].
Average mood: {average:.1f}/5.
Most common: {most_common}.
Give a 1-sentence observation and 1 short, fun recommendation.
Use emojis. Keep it under 50 words."""


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class SummaryUnavailableError(Exception):
    """Non-2xx response from the Claude API."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Claude API error {status_code}: {body}")


# ---------------------------------------------------------------------------
# Prompt building
# ---------------------------------------------------------------------------

def format_mood_history(records: Sequence[MoodRecord], tz: tzinfo) -> str:
    """Render records as ``"Mon, Oct 12: Happy (4/5)"`` joined by commas."""
    parts = []
    for record in records:
        local = record.timestamp.astimezone(tz)
        parts.append(
            f"{local:%a, %b} {local.day}: {record.mood_label} ({record.value}/5)"
        )
    return ", ".join(parts)


def build_prompt(records: Sequence[MoodRecord], tz: tzinfo) -> str:
    return _PROMPT_TEMPLATE.format(
        history=format_mood_history(records, tz),
        average=mean_value(records),
        most_common=most_common_mood(records),
    )


def local_summary(records: Sequence[MoodRecord]) -> str:
    """Summary sentence built without the API."""
    return (
        f"Your mood averaged {mean_value(records):.1f}/5 across "
        f"{len(records)} check-in{'s' if len(records) != 1 else ''}, "
        f"mostly {most_common_mood(records)}. Keep logging to spot your patterns! 🌱"
    )


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class MoodSummaryService:
    """Produces a short mood summary, via Claude when available."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._api_url = ANTHROPIC_MESSAGES_URL

    async def summarise(
        self,
        records: Sequence[MoodRecord],
        now: datetime,
        tz: Optional[tzinfo] = None,
    ) -> str:
        """Summarise the records from the last ``summary_window_days``.

        *records* may be the full history; windowing happens here.
        """
        now = as_aware(now)
        zone = tz if tz is not None else self._settings.tzinfo
        start = now - timedelta(days=self._settings.summary_window_days)
        recent = filter_since(sort_newest_first(records), start)

        if not recent:
            return NO_DATA_MESSAGE

        if not self._settings.enable_ai_summary or not self._settings.anthropic_api_key:
            logger.debug("AI summary disabled or unconfigured, using local summary")
            return local_summary(recent)

        try:
            text = await self._call_claude_api(build_prompt(recent, zone))
        except Exception:
            # Summary failure must never break the caller.
            logger.exception("Claude API call failed for mood summary")
            return FALLBACK_MESSAGE

        if not text.strip():
            logger.warning("Claude API returned an empty mood summary")
            return FALLBACK_MESSAGE

        return text.strip()

    async def _call_claude_api(self, prompt: str) -> str:
        """Send *prompt* to Claude and return the concatenated text blocks."""
        headers = {
            "x-api-key": self._settings.anthropic_api_key,
            "anthropic-version": "2023-06-01",
            "content-type": "application/json",
        }

        payload = {
            "model": self._settings.anthropic_model,
            "max_tokens": self._settings.anthropic_max_tokens,
            "messages": [
                {
                    "role": "user",
                    "content": prompt,
                }
            ],
        }

        async with httpx.AsyncClient(timeout=15.0) as client:
            response = await client.post(self._api_url, headers=headers, json=payload)

        if response.status_code >= 400:
            raise SummaryUnavailableError(response.status_code, response.text)

        data = response.json()
        text_parts = [
            block["text"]
            for block in data.get("content", [])
            if block.get("type") == "text"
        ]
        return "\n".join(text_parts)


# ---------------------------------------------------------------------------
# Singleton
# ---------------------------------------------------------------------------

_default_service: MoodSummaryService | None = None


def get_summary_service() -> MoodSummaryService:
    global _default_service
    if _default_service is None:
        _default_service = MoodSummaryService()
    return _default_service
