"""
Week-by-week override extraction

When a plan spells out every week, the values the author wrote for weeks
2..N are kept verbatim so they take precedence over computed progression.
"""

import logging
from typing import Dict, List, Optional, Tuple

from ..models import WeeklyOverride
from .base import BaseParser
from .models import HeaderMatch, ParsedExerciseLine
from .sections import locate_week

logger = logging.getLogger(__name__)


def override_from_line(parsed: ParsedExerciseLine) -> WeeklyOverride:
    return WeeklyOverride(
        target_weight=parsed.weight,
        target_sets=parsed.sets,
        target_reps_min=parsed.reps_min,
        target_reps_max=parsed.reps_max,
    )


class OverrideExtractor:
    """Collects exact per-week values for exercises first seen in week 1"""

    def __init__(self, grammar: BaseParser, text: str, week_headers: List[HeaderMatch], total_weeks: int):
        self.grammar = grammar
        self.text = text
        self.week_headers = week_headers
        self.total_weeks = total_weeks
        self._week_sections: Dict[int, str] = {}
        self._later_weeks: Dict[str, Dict[int, ParsedExerciseLine]] = {}
        self.missing_weeks: List[int] = []

        for week in range(2, total_weeks + 1):
            section = locate_week(text, week_headers, week)
            if section:
                self._week_sections[week] = section
            else:
                self.missing_weeks.append(week)
                logger.debug(f"Week {week} header not found in plan")

    def later_weeks(self, name: str) -> Dict[int, ParsedExerciseLine]:
        """Lines stated for ``name`` in weeks 2..N; each name is scanned once per plan"""
        key = name.strip().lower()
        if key in self._later_weeks:
            return self._later_weeks[key]

        found_by_week: Dict[int, ParsedExerciseLine] = {}
        pattern = self.grammar.exercise_pattern_for(name)
        for week, section in self._week_sections.items():
            found = self._find_in_section(pattern, section, name)
            if found is None:
                logger.debug(f"'{name}' not found in week {week}")
                continue
            found_by_week[week] = found
            logger.debug(f"Week {week} {name}: {found.sets}×{found.raw_reps} @ {found.weight}")

        self._later_weeks[key] = found_by_week
        return found_by_week

    def extract(self, base: ParsedExerciseLine) -> Tuple[Dict[int, WeeklyOverride], Optional[float]]:
        """
        Build the override map for one exercise slot.

        Week 1 is always this slot's own parse. When weeks 1 and 2 both carry
        numeric weights, their absolute difference is returned as a
        progression value candidate.
        """
        overrides: Dict[int, WeeklyOverride] = {1: override_from_line(base)}
        progression_delta: Optional[float] = None

        for week, found in self.later_weeks(base.name).items():
            overrides[week] = override_from_line(found)
            if week == 2 and _is_number(base.weight) and _is_number(found.weight):
                progression_delta = abs(float(found.weight) - float(base.weight))

        return overrides, progression_delta

    def _find_in_section(self, pattern, section: str, name: str) -> Optional[ParsedExerciseLine]:
        for line in section.splitlines():
            match = self.grammar.match_exercise_line(line, pattern)
            if not match:
                continue
            result = self.grammar.build_line_result(line, name, match)
            if result.matched:
                return result.exercise
        return None


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
