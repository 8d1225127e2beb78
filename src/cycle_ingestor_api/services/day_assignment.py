"""Weekday slotting and workout-type mapping for workout templates."""
import logging
from typing import Iterable, Optional

from ..models import WorkoutTemplate, WorkoutType

logger = logging.getLogger(__name__)

MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(1, 8)


def _is_leg_day(name: str) -> bool:
    return "legs" in name or "leg" in name


def assign_day_of_week(workout_name: str, existing_templates: Iterable[WorkoutTemplate]) -> Optional[int]:
    """
    Pick a weekday (1 = Monday .. 7 = Sunday) from the workout name.

    Checks run in this order and the first hit wins: push -> Monday,
    "full" + "a" -> Tuesday, pull -> Friday, "full" + "b" -> Saturday,
    leg(s) -> Wednesday, or Sunday when a leg day is already assigned.
    Anything else stays unassigned (None).
    """
    lower = workout_name.lower()

    if "push" in lower:
        day = MONDAY
    elif "full" in lower and "a" in lower:
        day = TUESDAY
    # Pull must come after the Full A test and before the leg test
    elif "pull" in lower:
        day = FRIDAY
    elif "full" in lower and "b" in lower:
        day = SATURDAY
    elif _is_leg_day(lower):
        has_leg_day = any(_is_leg_day(t.name.lower()) for t in existing_templates)
        day = SUNDAY if has_leg_day else WEDNESDAY
    else:
        day = None

    logger.debug(f"Assigned '{workout_name}' -> day {day if day else 'NONE'}")
    return day


def workout_type_from_header(workout_name: str) -> str:
    """'Full Body A' -> 'Full Body', otherwise the first word ('Push A' -> 'Push')"""
    if "Full Body" in workout_name:
        return "Full Body"
    words = workout_name.split()
    return words[0] if words else ""


def map_workout_type(type_name: str) -> WorkoutType:
    lower = type_name.lower()
    if "push" in lower:
        return WorkoutType.PUSH
    if "pull" in lower:
        return WorkoutType.PULL
    if "leg" in lower:
        return WorkoutType.LEGS
    if "upper" in lower:
        return WorkoutType.PUSH
    if "lower" in lower:
        return WorkoutType.LEGS
    if "full" in lower:
        return WorkoutType.FULL_BODY
    return WorkoutType.OTHER
