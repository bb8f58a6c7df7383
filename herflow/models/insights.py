"""
Insight model definitions for aggregated cycle statistics.
"""
from enum import Enum
from pydantic import BaseModel, Field

from herflow.models.daily_log import Symptom


class Regularity(str, Enum):
    """
    Cycle regularity classification.
    """
    REGULAR = "regular"
    IRREGULAR = "irregular"


class CycleInsights(BaseModel):
    """
    Aggregate statistics over the whole logged history.
    """
    avg_cycle_length: int
    avg_period_length: int
    cycle_variation: int
    regularity: Regularity
    total_periods: int
    top_symptoms: list[Symptom] = Field(default_factory=list)

    @property
    def is_regular(self) -> bool:
        return self.regularity == Regularity.REGULAR
