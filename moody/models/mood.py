"""
Mood Record Schemas
===================
Pydantic models for the mood records the insights engine consumes.

Records are supplied by an external store and are read-only here. The
model is the contract boundary: a value outside 1–5 or an unparseable
timestamp is rejected when the record is built, so every engine function
can assume validated input and never has to coerce.

Field names accept both the store's camelCase (``moodLabel``, or the
legacy ``mood``) and snake_case.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Mood levels
# ---------------------------------------------------------------------------

class MoodLevel(BaseModel):
    """One of the five fixed points on the mood scale."""

    model_config = ConfigDict(frozen=True)

    value: int = Field(..., ge=1, le=5)
    label: str
    emoji: str
    color: str = Field(..., description="Display color as a #rrggbb hex string.")


# Highest first; this is the order distributions and legends use.
MOOD_LEVELS: tuple[MoodLevel, ...] = (
    MoodLevel(value=5, label="Very Happy", emoji="😄", color="#4caf50"),
    MoodLevel(value=4, label="Happy", emoji="😊", color="#8bc34a"),
    MoodLevel(value=3, label="Neutral", emoji="😐", color="#ffc107"),
    MoodLevel(value=2, label="Sad", emoji="😔", color="#ff9800"),
    MoodLevel(value=1, label="Very Sad", emoji="😢", color="#f44336"),
)

_LEVELS_BY_VALUE = {level.value: level for level in MOOD_LEVELS}


def level_for_value(value: int) -> MoodLevel:
    """Return the MoodLevel for *value*. Raises KeyError outside 1–5."""
    return _LEVELS_BY_VALUE[value]


# ---------------------------------------------------------------------------
# Record
# ---------------------------------------------------------------------------

class MoodRecord(BaseModel):
    """A single logged mood observation for one user."""

    model_config = ConfigDict(frozen=True)

    mood_label: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("mood_label", "moodLabel", "mood"),
        serialization_alias="moodLabel",
        description="Mood category, e.g. 'Happy'.",
    )
    value: int = Field(
        ...,
        ge=1,
        le=5,
        description="1 = most negative, 5 = most positive.",
    )
    timestamp: datetime = Field(
        ...,
        description=(
            "When the entry was logged. Naive datetimes are taken as UTC; "
            "calendar-day grouping happens in the configured reference zone."
        ),
    )
    note: Optional[str] = Field(
        default=None,
        description="Free text. Never read by the engine.",
    )
    emoji: str = ""

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
