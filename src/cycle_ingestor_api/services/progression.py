"""Week-by-week target calculation and cycle date helpers.

``calculate_weekly_progression`` is a pure function: exact author values for
a week win, otherwise the exercise's progression rule is applied to its
week-1 base values.
"""
import logging
from datetime import datetime, timedelta
from typing import List, Optional

from ..models import (
    EffectiveTargets,
    ProgressionType,
    WeightValue,
    WorkoutTemplateExercise,
)

logger = logging.getLogger(__name__)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def default_progression_value(base_weight: WeightValue) -> float:
    """Fallback weekly increment when the plan doesn't show one: 5 for loads of 50+, else 2.5."""
    if _is_number(base_weight) and base_weight >= 50:
        return 5.0
    return 2.5


def calculate_weekly_progression(exercise: WorkoutTemplateExercise, week_number: int) -> EffectiveTargets:
    """
    Effective weight/sets/reps for ``exercise`` in ``week_number``.

    An override for the week is returned as written, with missing fields
    taken from the base values. Otherwise week 1 is the base and each later
    week adds ``progression_value`` to weight (weight, double) or to both rep
    bounds (reps). Numeric results are clamped: weight >= 0, reps min >= 1,
    reps max >= reps min.
    """
    overrides = exercise.weekly_overrides or {}
    override = overrides.get(week_number)

    if override is not None:
        logger.debug(f"Using exact values for week {week_number} of exercise {exercise.exercise_id}")
        reps_min = _first_set(override.target_reps_min, exercise.target_reps_min)
        return EffectiveTargets(
            target_weight=_first_set(override.target_weight, exercise.target_weight, 0),
            target_sets=_first_set(override.target_sets, exercise.target_sets),
            target_reps_min=reps_min,
            target_reps_max=_first_set(
                override.target_reps_max,
                exercise.target_reps_max,
                override.target_reps_min,
                exercise.target_reps_min,
            ),
        )

    base_weight = exercise.target_weight if exercise.target_weight is not None else 0
    base_reps_min = exercise.target_reps_min
    base_reps_max = _first_set(exercise.target_reps_max, base_reps_min)
    step = exercise.progression_value or 0
    weeks_of_progression = week_number - 1

    weight = base_weight
    reps_min = base_reps_min
    reps_max = base_reps_max

    progression_type = ProgressionType(exercise.progression_type)
    if progression_type in (ProgressionType.WEIGHT, ProgressionType.DOUBLE):
        # TODO: double progression should climb reps to the top of the range before adding weight
        if _is_number(base_weight):
            weight = base_weight + step * weeks_of_progression
    elif progression_type == ProgressionType.REPS:
        if _is_number(base_reps_min):
            reps_min = base_reps_min + step * weeks_of_progression
        if _is_number(base_reps_max):
            reps_max = base_reps_max + step * weeks_of_progression

    if _is_number(weight):
        weight = max(0, weight)
    if _is_number(reps_min):
        reps_min = max(1, _as_int(reps_min))
    if _is_number(reps_max):
        reps_max = _as_int(reps_max)
        if _is_number(reps_min):
            reps_max = max(reps_min, reps_max)

    return EffectiveTargets(
        target_weight=weight,
        target_sets=exercise.target_sets,
        target_reps_min=reps_min,
        target_reps_max=reps_max,
    )


def effective_schedule(exercise: WorkoutTemplateExercise, weeks: int) -> List[EffectiveTargets]:
    """Targets for weeks 1..``weeks``"""
    return [calculate_weekly_progression(exercise, week) for week in range(1, weeks + 1)]


def calculate_cycle_end_date(start_date: datetime, weeks: int) -> datetime:
    return start_date + timedelta(days=weeks * 7)


def current_cycle_week(start_date: datetime, length_in_weeks: int, today: Optional[datetime] = None) -> int:
    """1-based week of the cycle that ``today`` falls in, capped to the cycle length"""
    today = today or datetime.now(start_date.tzinfo)
    diff_days = (today - start_date).days
    diff_weeks = diff_days // 7
    return max(1, min(diff_weeks + 1, length_in_weeks))


def _first_set(*values):
    for value in values:
        if value is not None:
            return value
    return None


def _as_int(value):
    """Rep counts are whole numbers even when the increment isn't"""
    if isinstance(value, float):
        return int(round(value))
    return value
