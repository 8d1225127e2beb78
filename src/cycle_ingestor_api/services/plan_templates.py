"""Starter plans for short natural-language prompts.

"4 week push pull legs" or "3 day full body for 6 weeks" carries no exercise
detail, so it is expanded into a formatted week-1 plan the text parser can
read. The requested number of weeks is returned alongside.
"""
import logging
import re
from typing import Dict, List, Optional, Tuple

from ..config import settings

logger = logging.getLogger(__name__)

WEEKS_PATTERN = re.compile(r'(\d+)\s*-?\s*weeks?', re.IGNORECASE)

# (exercise, sets, reps, weight kg)
SPLIT_TEMPLATES: Dict[str, List[Tuple[str, List[Tuple[str, int, str, float]]]]] = {
    "push/pull/legs": [
        ("Push A", [
            ("Bench Press", 4, "6-8", 50),
            ("Overhead Press", 3, "8-10", 35),
            ("Incline Press", 3, "10-12", 30),
            ("Lateral Raises", 3, "12-15", 15),
            ("Tricep Pushdowns", 3, "12-15", 20),
        ]),
        ("Pull A", [
            ("Deadlift", 4, "5-6", 80),
            ("Pull-ups", 3, "8-10", 0),
            ("Barbell Rows", 3, "8-10", 50),
            ("Face Pulls", 3, "15-20", 15),
            ("Bicep Curls", 3, "10-12", 15),
        ]),
        ("Legs A", [
            ("Squats", 4, "6-8", 100),
            ("Romanian Deadlifts", 3, "8-10", 60),
            ("Leg Press", 3, "10-12", 120),
            ("Leg Curls", 3, "12-15", 40),
            ("Calf Raises", 4, "15-20", 60),
        ]),
    ],
    "upper/lower": [
        ("Upper A", [
            ("Bench Press", 4, "6-8", 50),
            ("Pull-ups", 3, "8-10", 0),
            ("Overhead Press", 3, "8-10", 35),
            ("Barbell Rows", 3, "8-10", 50),
            ("Dumbbell Curls", 3, "10-12", 15),
        ]),
        ("Lower A", [
            ("Squats", 4, "6-8", 100),
            ("Romanian Deadlifts", 3, "8-10", 60),
            ("Leg Press", 3, "10-12", 120),
            ("Leg Curls", 3, "12-15", 40),
            ("Calf Raises", 4, "15-20", 60),
        ]),
    ],
    "full body": [
        ("Full Body A", [
            ("Squats", 3, "6-8", 100),
            ("Bench Press", 3, "6-8", 50),
            ("Pull-ups", 3, "8-10", 0),
            ("Overhead Press", 3, "8-10", 35),
            ("Romanian Deadlifts", 3, "8-10", 60),
            ("Plank", 3, "45-60", 0),
        ]),
    ],
}


def detect_split(prompt: str) -> str:
    lower = prompt.lower()
    if "full body" in lower or "3 day" in lower:
        return "full body"
    if "upper" in lower and "lower" in lower:
        return "upper/lower"
    return "push/pull/legs"


def detect_weeks(prompt: str, default: Optional[int] = None) -> int:
    match = WEEKS_PATTERN.search(prompt)
    if match and int(match.group(1)) > 0:
        return int(match.group(1))
    return default or settings.DEFAULT_PROMPT_WEEKS


def _format_weight(weight: float) -> str:
    return f"{weight:g}kg"


def build_plan_text(prompt: str, cycle_number: int) -> Tuple[str, int]:
    """Expand a short prompt into formatted plan text; returns (text, weeks)"""
    split = detect_split(prompt)
    weeks = detect_weeks(prompt)
    logger.info(f"Building {split} starter plan ({weeks} weeks) from prompt")

    lines = [f"## Cycle {cycle_number} Plan", "", "Week 1", ""]
    for day, (workout_name, exercises) in enumerate(SPLIT_TEMPLATES[split], start=1):
        lines.append(f"DAY {day} — {workout_name}")
        for name, sets, reps, weight in exercises:
            lines.append(f"- {name}: {sets} × {reps} @ {_format_weight(weight)}")
        lines.append("")

    lines.append(f"**Duration:** {weeks} weeks")
    lines.append("**Progression:** Add 2.5kg to upper body and 5kg to lower body movements each week.")
    return "\n".join(lines), weeks
