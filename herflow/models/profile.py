"""
User profile model definition.
"""
from datetime import date
from typing import Optional
from pydantic import Field, field_validator

from herflow.models.base import CamelModel

DEFAULT_CYCLE_LENGTH = 28
DEFAULT_PERIOD_LENGTH = 5

MIN_CYCLE_LENGTH = 21
MAX_CYCLE_LENGTH = 45
MIN_PERIOD_LENGTH = 2
MAX_PERIOD_LENGTH = 10


class UserProfile(CamelModel):
    """
    Represents the person tracking their cycle.
    """
    name: str = Field(..., min_length=1)
    date_of_birth: Optional[date] = None
    year_of_birth: Optional[int] = None
    cycle_length: int = Field(DEFAULT_CYCLE_LENGTH, ge=MIN_CYCLE_LENGTH, le=MAX_CYCLE_LENGTH)
    period_length: int = Field(DEFAULT_PERIOD_LENGTH, ge=MIN_PERIOD_LENGTH, le=MAX_PERIOD_LENGTH)
    pregnancy_mode: bool = False
    last_period_start: Optional[date] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value
