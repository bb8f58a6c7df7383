"""
Period entry model definition.
"""
from datetime import date
from enum import IntEnum
from typing import Optional
from pydantic import model_validator

from herflow.models.base import CamelModel


class FlowIntensity(IntEnum):
    """
    Menstrual flow intensity levels.
    """
    SPOTTING = 1
    LIGHT = 2
    MEDIUM = 3
    HEAVY = 4

    @property
    def label(self) -> str:
        return self.name.capitalize()


class PeriodEntry(CamelModel):
    """
    A logged period spanning start_date to end_date inclusive.
    """
    start_date: date
    end_date: date
    flow_intensity: Optional[FlowIntensity] = None

    @model_validator(mode="after")
    def check_date_order(self) -> "PeriodEntry":
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self

    @property
    def length(self) -> int:
        """Inclusive number of days in the period."""
        return (self.end_date - self.start_date).days + 1

    def contains(self, day: date) -> bool:
        """Check whether a calendar day falls within this period."""
        return self.start_date <= day <= self.end_date
