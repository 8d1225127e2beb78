"""
Base Parser

Shared grammar for plan text: week headers, workout/day headers and
exercise lines of the form "- Name: sets × reps @ weight".
"""

import math
import re
import logging
from typing import List, Optional, Tuple

from ..config import settings
from ..models import RepsValue, WeightValue
from .models import HeaderMatch, LineParseResult, ParsedExerciseLine

logger = logging.getLogger(__name__)

BULLET_CHARS = "•-–—*"

# Pattern fragments shared by the generic line grammar and the per-exercise
# patterns built for week-by-week lookups.
_BULLET = r'^\s*[•\-–—*]\s*'
_SEPARATOR = r'\s*[:\-–—]\s*'
# Matched against stripped lines. Reps start and end on a non-space so they
# can't trade characters with the whitespace around "@".
_SETS_REPS_WEIGHT = (
    r'(?P<sets>\d+)\s*[×xX]\s*'                  # Sets ×
    r'(?P<reps>[^@\s](?:[^@\n]*[^@\s])?)'        # Reps: "8", "6-8", "45 sec"
    r'(?:\s*@\s*(?P<weight>\S.*))?'              # Optional "@ weight"
    r'$'
)


class PlanIngestionError(RuntimeError):
    """Raised when no usable cycle can be produced from the input"""


class InvalidPlanInputError(PlanIngestionError):
    """Empty text, non-positive cycle number or malformed structured input"""


class NoWorkoutsParsedError(PlanIngestionError):
    """Input was accepted but no workout with at least one exercise came out of it"""


class BaseParser:
    """Shared grammar and warning bookkeeping for plan parsers"""

    # Week header: optional "⭐️", "##" or "**" marker then "Week N", only at
    # the start of a line. "(Week 6 ...)" and "- Week 3 ..." never count.
    WEEK_HEADER_PATTERN = re.compile(
        r'^[ \t]*(?:[#*]+|⭐️?)?[ \t]*week[ \t]+(\d+)',
        re.IGNORECASE | re.MULTILINE
    )

    # Workout header: "DAY 1 — Push A", "Day 2 - Pull", "DAY 3 – Legs"
    WORKOUT_HEADER_PATTERN = re.compile(
        r'^[^\w\n]*day\s+(\d+)\s*[\-–—]\s*([^\n]+)',
        re.IGNORECASE | re.MULTILINE
    )

    EXERCISE_LINE_PATTERN = re.compile(_BULLET + r'(?P<name>.+?)' + _SEPARATOR + _SETS_REPS_WEIGHT)

    REPS_RANGE_PATTERN = re.compile(r'^(\d+)\s*[\-–—]\s*(\d+)$')
    REPS_INT_PATTERN = re.compile(r'^\d+$')

    WEIGHT_RANGE_PATTERN = re.compile(
        r'^\+?(\d+(?:\.\d+)?)\s*[\-–—]\s*(\d+(?:\.\d+)?)\s*(?:kgs?|lbs?)?',
        re.IGNORECASE
    )  # "12.5-15 lb", "+20-25kg"
    WEIGHT_SINGLE_PATTERN = re.compile(r'^\+?(\d+(?:\.\d+)?)\s*(?:kgs?|lbs?)?', re.IGNORECASE)  # "50kg", "+20 lb"

    def __init__(self):
        self.errors: List[str] = []
        self.warnings: List[str] = []

    # ------------------------------------------------------------------
    # Headers
    # ------------------------------------------------------------------

    def find_week_headers(self, text: str) -> List[HeaderMatch]:
        """Week headers in order of appearance"""
        return [
            HeaderMatch(
                kind="week",
                text=m.group(0).strip(),
                number=int(m.group(1)),
                offset=m.start(),
            )
            for m in self.WEEK_HEADER_PATTERN.finditer(text)
        ]

    def find_workout_headers(self, text: str) -> List[HeaderMatch]:
        """Workout/day headers in order of appearance"""
        return [
            HeaderMatch(
                kind="workout",
                text=m.group(0).strip(),
                number=int(m.group(1)),
                name=self.clean_workout_name(m.group(2)),
                offset=m.start(),
            )
            for m in self.WORKOUT_HEADER_PATTERN.finditer(text)
        ]

    @staticmethod
    def clean_workout_name(name: str) -> str:
        return name.strip().strip('*#').strip()

    # ------------------------------------------------------------------
    # Exercise lines
    # ------------------------------------------------------------------

    @staticmethod
    def is_exercise_candidate(line: str) -> bool:
        """Lines that start with a bullet are expected to be exercises ("**bold**" lines are not)"""
        trimmed = line.strip()
        return bool(trimmed) and trimmed[0] in BULLET_CHARS and not trimmed.startswith("**")

    def parse_exercise_line(self, line: str) -> LineParseResult:
        """Run the exercise grammar over one line; never raises"""
        if len(line) > settings.MAX_EXERCISE_LINE_LENGTH:
            return LineParseResult(matched=False, line=line[:80], reason="line too long")

        match = self.match_exercise_line(line)
        if not match:
            return LineParseResult(matched=False, line=line, reason="no exercise grammar match")

        return self.build_line_result(line, match.group('name'), match)

    def match_exercise_line(self, line: str, pattern: Optional["re.Pattern[str]"] = None) -> Optional["re.Match[str]"]:
        """Match ``pattern`` (the generic line grammar by default) against the stripped line"""
        if len(line) > settings.MAX_EXERCISE_LINE_LENGTH:
            return None
        return (pattern or self.EXERCISE_LINE_PATTERN).match(line.strip())

    def exercise_pattern_for(self, name: str) -> "re.Pattern[str]":
        """Same line grammar, with the exercise name fixed to ``name``"""
        return re.compile(_BULLET + re.escape(name.strip()) + _SEPARATOR + _SETS_REPS_WEIGHT, re.IGNORECASE)

    def build_line_result(self, line: str, name: str, match: "re.Match[str]") -> LineParseResult:
        sets = int(match.group('sets'))
        if sets < 1:
            return LineParseResult(matched=False, line=line, reason="set count must be at least 1")

        raw_reps = match.group('reps').strip()
        raw_weight = match.group('weight')
        reps_min, reps_max = self.parse_reps(raw_reps)

        return LineParseResult(
            matched=True,
            line=line,
            exercise=ParsedExerciseLine(
                name=self.normalize_exercise_name(name),
                sets=sets,
                reps_min=reps_min,
                reps_max=reps_max,
                weight=self.parse_weight(raw_weight),
                raw_reps=raw_reps,
                raw_weight=raw_weight.strip() if raw_weight else None,
            ),
        )

    def parse_reps(self, reps_str: str) -> Tuple[RepsValue, RepsValue]:
        """
        Parse a rep specification.

        "8" -> (8, 8), "6-8" -> (6, 8); anything else ("45 sec", "AMRAP")
        is kept verbatim for both bounds.
        """
        reps_str = str(reps_str).strip()

        range_match = self.REPS_RANGE_PATTERN.match(reps_str)
        if range_match:
            return int(range_match.group(1)), int(range_match.group(2))

        if self.REPS_INT_PATTERN.match(reps_str):
            return int(reps_str), int(reps_str)

        return reps_str, reps_str

    def parse_weight(self, weight_str: Optional[str]) -> WeightValue:
        """
        Parse a weight specification.

        Missing or "BW" -> 0 (bodyweight), "light" -> "light", "A-B" -> average
        of A and B rounded to one decimal, single number -> that number,
        anything else -> 0.
        """
        if not weight_str:
            return 0

        weight_str = weight_str.strip()
        lowered = weight_str.lower()
        if lowered == 'bw':
            return 0
        if lowered == 'light':
            return 'light'

        range_match = self.WEIGHT_RANGE_PATTERN.match(weight_str)
        if range_match:
            low = float(range_match.group(1))
            high = float(range_match.group(2))
            return round_half_up((low + high) / 2)

        single_match = self.WEIGHT_SINGLE_PATTERN.match(weight_str)
        if single_match:
            return float(single_match.group(1))

        return 0

    def normalize_exercise_name(self, name: str) -> str:
        """Collapse runs of whitespace in an exercise name"""
        return " ".join(name.split()).strip()

    def add_error(self, error: str):
        """Add an error message"""
        self.errors.append(error)
        logger.error(f"Parser error: {error}")

    def add_warning(self, warning: str):
        """Add a warning message"""
        self.warnings.append(warning)
        logger.warning(f"Parser warning: {warning}")


def round_half_up(value: float, places: int = 1) -> float:
    """Round halves away from zero (12.25 -> 12.3), unlike round()"""
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor
