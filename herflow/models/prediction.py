"""
Prediction model definitions for upcoming cycle events.
"""
from datetime import date
from typing import Optional
from pydantic import BaseModel, model_validator


class FertileWindow(BaseModel):
    """
    Range of days with the highest conception probability, inclusive.
    """
    start: date
    end: date

    @model_validator(mode="after")
    def check_order(self) -> "FertileWindow":
        if self.end < self.start:
            raise ValueError("Fertile window end must not be before its start")
        return self

    def contains(self, day: date) -> bool:
        """Check whether a calendar day falls within the window."""
        return self.start <= day <= self.end


class CyclePrediction(BaseModel):
    """
    Everything the predictor derives for a single day.

    Any field may be None when there is not enough data yet.
    """
    target_date: date
    next_period_date: Optional[date] = None
    days_until_next_period: Optional[int] = None
    ovulation_date: Optional[date] = None
    fertile_window: Optional[FertileWindow] = None
    cycle_day: Optional[int] = None
    is_period_day: bool = False
    is_fertile_day: bool = False
    is_ovulation_day: bool = False

    @property
    def is_late(self) -> bool:
        """Check if the predicted period date has already passed."""
        return self.days_until_next_period is not None and self.days_until_next_period < 0
