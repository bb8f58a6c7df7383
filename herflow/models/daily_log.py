"""
Daily log model definition for symptoms, moods and wellbeing notes.
"""
import math
from datetime import date
from enum import Enum
from typing import List, Optional
from pydantic import Field, field_validator

from herflow.models.base import CamelModel
from herflow.models.period import FlowIntensity

MIN_WATER_INTAKE = 0
MAX_WATER_INTAKE = 12


class Symptom(str, Enum):
    """
    Physical symptoms that can be logged for a day.
    """
    CRAMPS = "cramps"
    HEADACHE = "headache"
    BLOATING = "bloating"
    FATIGUE = "fatigue"
    BACKACHE = "backache"
    NAUSEA = "nausea"


class Mood(str, Enum):
    """
    Moods that can be logged for a day.
    """
    HAPPY = "happy"
    CALM = "calm"
    NEUTRAL = "neutral"
    SAD = "sad"
    ANXIOUS = "anxious"
    IRRITATED = "irritated"


class OvulationTest(str, Enum):
    """Result of an ovulation test."""
    POSITIVE = "positive"
    NEGATIVE = "negative"


def _normalize_tags(values):
    """Lower-case free-text tags and drop repeats, keeping first occurrence."""
    if values is None:
        return []
    if isinstance(values, (str, Enum)):
        values = [values]
    if not isinstance(values, (list, tuple, set)):
        raise ValueError("Tags must be a list")
    seen = []
    for value in values:
        if isinstance(value, Enum):
            value = value.value
        if isinstance(value, str):
            value = value.strip().lower()
        if value not in seen:
            seen.append(value)
    return seen


class DailyLog(CamelModel):
    """
    Everything logged for a single calendar day.

    Symptom and mood tags are closed enumerations. Older free-text values
    such as ``"Cramps "`` are normalized before validation so historical
    data keeps counting towards the same tag.
    """
    date: date
    symptoms: List[Symptom] = Field(default_factory=list)
    moods: List[Mood] = Field(default_factory=list)
    medicine: List[str] = Field(default_factory=list)
    ovulation_test: Optional[OvulationTest] = None
    weight: Optional[float] = Field(None, gt=0)
    temperature: Optional[float] = None
    water_intake: int = MIN_WATER_INTAKE
    notes: Optional[str] = None
    flow_intensity: Optional[FlowIntensity] = None

    @field_validator("symptoms", "moods", mode="before")
    @classmethod
    def normalize_tags(cls, value):
        return _normalize_tags(value)

    @field_validator("water_intake", mode="before")
    @classmethod
    def clamp_water_intake(cls, value):
        if value is None:
            return MIN_WATER_INTAKE
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            raise ValueError("Water intake must be a whole number of glasses")
        if not isinstance(value, int):
            number = float(value)
            if not math.isfinite(number) or not number.is_integer():
                raise ValueError("Water intake must be a whole number of glasses")
            value = int(number)
        return max(MIN_WATER_INTAKE, min(MAX_WATER_INTAKE, value))

    @property
    def has_entries(self) -> bool:
        """Check whether the log holds notes, symptoms or moods."""
        return bool(self.notes or self.symptoms or self.moods)

    def with_water_intake(self, delta: int) -> "DailyLog":
        """Return a copy with water intake changed by delta glasses, clamped."""
        return self.model_validate({**self.model_dump(), "water_intake": self.water_intake + delta})
