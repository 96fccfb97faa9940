"""
Shared data models for the Anger Journal service.

This module defines the core domain models used across multiple layers
of the application (classifier, store, statistics, CLI, API). Field names are
snake_case in Python and camelCase on the wire.
"""

from datetime import date as Date
from datetime import datetime
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MoodScore = Annotated[int, Field(ge=0, le=100, description="Mood score, 0-100")]


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DistortionType(str, Enum):
    """The fixed set of cognitive distortion categories."""

    LABELING = "labeling"
    MIND_READING = "mind_reading"
    ALL_OR_NOTHING = "all_or_nothing"
    PERSONALIZATION = "personalization"
    EXTERNALIZATION = "externalization"


class Emotion(CamelModel):
    """An emotion felt in a situation, with its intensity."""

    type: str = Field(..., min_length=1, description="Name of the emotion")
    intensity: int = Field(..., ge=0, le=100, description="Intensity, 0-100")


class DistortionFinding(CamelModel):
    """One detected distortion category."""

    model_config = ConfigDict(frozen=True)

    type: DistortionType
    description: str
    suggestion: str


class JournalEntry(CamelModel):
    """Payload for creating a journal record."""

    date: Date = Field(..., description="Calendar date the situation happened")
    situation: str
    emotions: list[Emotion] = Field(..., min_length=1)
    thoughts: str
    evidence: str
    counter_evidence: str
    balanced_thinking: str
    mood_before: MoodScore
    mood_after: MoodScore


class ClassifiedEntry(JournalEntry):
    """A journal entry with the distortions detected in its text."""

    detected_distortions: list[DistortionFinding] = Field(default_factory=list)


class JournalRecord(ClassifiedEntry):
    """A stored journal record."""

    model_config = ConfigDict(frozen=True)

    id: int
    # Not length-checked: a corrupt stored payload reads back as empty.
    emotions: list[Emotion]
    created_at: datetime


class DistortionCount(CamelModel):
    type: DistortionType
    count: int


class StatsReport(CamelModel):
    """Summary statistics over every record."""

    total_records: int
    weekly_records: int
    avg_mood_improvement: float
    common_distortions: list[DistortionCount]


class EmotionSummary(CamelModel):
    type: str
    count: int
    avg_intensity: int


class DailyMood(CamelModel):
    date: Date
    avg_mood_before: int
    avg_mood_after: int
    avg_improvement: int


class AnalyzeRequest(CamelModel):
    """Payload for analyzing text without saving a record."""

    thoughts: str = ""
    situation: str = ""
    evidence: str = ""
