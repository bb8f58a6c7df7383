"""
Statistics calculation service for cycle tracking data.

This module provides functionality for calculating cycle and period
lengths, regularity and the most common symptoms from the logged history.
Results are recomputed from scratch on every call.
"""
from typing import Dict, List, Optional

from herflow.models.daily_log import DailyLog, Symptom
from herflow.models.insights import CycleInsights, Regularity
from herflow.models.period import PeriodEntry
from herflow.models.profile import DEFAULT_CYCLE_LENGTH, DEFAULT_PERIOD_LENGTH, UserProfile
from herflow.services.constants import (
    MAX_VALID_CYCLE_DAYS,
    MIN_VALID_CYCLE_DAYS,
    REGULARITY_THRESHOLD_DAYS,
    TOP_SYMPTOM_COUNT,
)
from herflow.services.utils import round_half_up
from herflow.utils.logging import logger

def calculate_cycle_lengths(periods: List[PeriodEntry]) -> List[int]:
    """
    Calculate days between consecutive period starts.

    Args:
        periods: Logged periods, most recent first

    Returns:
        Cycle lengths in days, most recent first

    Note:
        Lengths outside the open range (0, 60) come from duplicate,
        misordered or mistyped entries and are left out. The entries
        themselves are not touched.
    """
    cycle_lengths = []
    for current, previous in zip(periods, periods[1:]):
        length = (current.start_date - previous.start_date).days
        if MIN_VALID_CYCLE_DAYS < length < MAX_VALID_CYCLE_DAYS:
            cycle_lengths.append(length)
        else:
            logger.info("Skipping outlier cycle length", extra={
                "current_start": str(current.start_date),
                "previous_start": str(previous.start_date),
                "length": length
            })
    return cycle_lengths

def calculate_period_lengths(periods: List[PeriodEntry]) -> List[int]:
    """Inclusive day count of every logged period."""
    return [period.length for period in periods]

def calculate_cycle_variation(cycle_lengths: List[int]) -> int:
    """Spread between the longest and shortest cycle, 0 with under two samples."""
    if len(cycle_lengths) < 2:
        return 0
    return max(cycle_lengths) - min(cycle_lengths)

def classify_regularity(cycle_variation: int) -> Regularity:
    """Cycles varying by at most 7 days are regular."""
    if cycle_variation <= REGULARITY_THRESHOLD_DAYS:
        return Regularity.REGULAR
    return Regularity.IRREGULAR

def rank_symptoms(daily_logs: List[DailyLog], limit: int = TOP_SYMPTOM_COUNT) -> List[Symptom]:
    """
    Rank symptoms by how many logs mention them.

    Args:
        daily_logs: All daily logs
        limit: Number of symptoms to return

    Returns:
        Most frequent symptoms first; ties keep the order in which the
        symptoms were first logged
    """
    counts: Dict[Symptom, int] = {}
    for log in daily_logs:
        for symptom in log.symptoms:
            counts[symptom] = counts.get(symptom, 0) + 1

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [symptom for symptom, _ in ranked[:limit]]

def calculate_cycle_insights(
    profile: Optional[UserProfile],
    periods: List[PeriodEntry],
    daily_logs: List[DailyLog]
) -> Optional[CycleInsights]:
    """
    Calculate overall cycle statistics.

    Args:
        profile: User profile, used for fallback averages
        periods: Logged periods, most recent first
        daily_logs: All daily logs

    Returns:
        CycleInsights, or None when fewer than two periods are logged

    Example:
        >>> insights = calculate_cycle_insights(store.profile, store.periods, store.daily_logs)
        >>> if insights is None:
        ...     print("Not enough data yet")
    """
    if len(periods) < 2:
        logger.debug("Not enough periods for insights", extra={"periods": len(periods)})
        return None

    cycle_lengths = calculate_cycle_lengths(periods)
    period_lengths = calculate_period_lengths(periods)

    if cycle_lengths:
        avg_cycle_length = round_half_up(sum(cycle_lengths) / len(cycle_lengths))
    else:
        avg_cycle_length = profile.cycle_length if profile else DEFAULT_CYCLE_LENGTH

    if period_lengths:
        avg_period_length = round_half_up(sum(period_lengths) / len(period_lengths))
    else:
        avg_period_length = profile.period_length if profile else DEFAULT_PERIOD_LENGTH

    cycle_variation = calculate_cycle_variation(cycle_lengths)

    insights = CycleInsights(
        avg_cycle_length=avg_cycle_length,
        avg_period_length=avg_period_length,
        cycle_variation=cycle_variation,
        regularity=classify_regularity(cycle_variation),
        total_periods=len(periods),
        top_symptoms=rank_symptoms(daily_logs)
    )
    logger.info("Calculated cycle insights", extra={
        "cycles_used": len(cycle_lengths),
        "avg_cycle_length": insights.avg_cycle_length,
        "cycle_variation": insights.cycle_variation
    })
    return insights
