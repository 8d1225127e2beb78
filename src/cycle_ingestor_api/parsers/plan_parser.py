"""
Plan Parser

Turns a formatted multi-week plan into a Cycle:

    ⭐️ WEEK 1
    DAY 1 — Push A
    - Bench Press: 4 × 6-8 @ 50kg
    - Plank: 3 × 45 sec

Only week 1 builds workout templates. Later weeks are read solely for the
exact per-exercise values they state (weekly overrides).
"""

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, Set, Tuple

from ..models import (
    Cycle,
    ProgressionType,
    WorkoutTemplate,
    WorkoutTemplateExercise,
    WorkoutType,
)
from ..services.day_assignment import assign_day_of_week, map_workout_type, workout_type_from_header
from ..services.exercise_library import ExerciseResolver, IdFactory, default_id_factory
from ..services.progression import calculate_cycle_end_date, default_progression_value
from .base import BaseParser, InvalidPlanInputError, NoWorkoutsParsedError
from .models import Section
from .overrides import OverrideExtractor
from .sections import split_weeks, split_workouts

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CycleAssembler(BaseParser):
    """
    Template bookkeeping shared by the text and structured input paths:
    weekday assignment, (name, weekday) duplicate suppression and the final
    Cycle envelope.
    """

    def __init__(
        self,
        resolver: ExerciseResolver,
        clock: Optional[Clock] = None,
        id_factory: Optional[IdFactory] = None,
    ):
        super().__init__()
        self.resolver = resolver
        self.clock = clock or utc_now
        self.id_factory = id_factory or default_id_factory

    def _reset(self):
        self.errors = []
        self.warnings = []

    @staticmethod
    def _check_cycle_number(cycle_number: int):
        if not isinstance(cycle_number, int) or isinstance(cycle_number, bool) or cycle_number < 1:
            raise InvalidPlanInputError(f"Cycle number must be a positive integer, got {cycle_number!r}")

    def _add_template(
        self,
        templates: List[WorkoutTemplate],
        seen: Set[Tuple[str, Optional[int]]],
        cycle_id: str,
        name: str,
        exercises: List[WorkoutTemplateExercise],
        workout_type: WorkoutType,
    ) -> Optional[WorkoutTemplate]:
        """Append a template unless its (name, weekday) pair was already taken"""
        day_of_week = assign_day_of_week(name, templates)

        key = (name.lower(), day_of_week)
        if key in seen:
            self.add_warning(f"Duplicate workout '{name}' on day {day_of_week or 'NONE'} skipped")
            return None
        seen.add(key)

        template = WorkoutTemplate(
            id=f"tpl-{self.id_factory()}",
            cycle_id=cycle_id,
            name=name,
            workout_type=workout_type,
            day_of_week=day_of_week,
            order_index=len(templates),
            exercises=exercises,
        )
        templates.append(template)
        logger.info(
            f"Created template '{name}' ({template.workout_type}) -> day "
            f"{day_of_week or 'NONE'} with {len(exercises)} exercises"
        )
        return template

    def _build_cycle(
        self,
        cycle_id: str,
        cycle_number: int,
        length_in_weeks: int,
        templates: List[WorkoutTemplate],
        workouts_per_week: Optional[int] = None,
    ) -> Cycle:
        if not templates:
            raise NoWorkoutsParsedError("Could not extract any workouts from the plan")

        now = self.clock()
        cycle = Cycle(
            id=cycle_id,
            cycle_number=cycle_number,
            start_date=now,
            length_in_weeks=length_in_weeks,
            end_date=calculate_cycle_end_date(now, length_in_weeks),
            workouts_per_week=workouts_per_week or len(templates),
            is_active=True,
            workout_templates=templates,
            created_at=now,
        )
        logger.info(
            f"Built cycle {cycle_number}: {length_in_weeks} weeks, "
            f"{len(templates)} workouts, {len(self.warnings)} warnings"
        )
        return cycle


class PlanParser(CycleAssembler):
    """Parser for formatted week/day/exercise plan text"""

    def parse(self, text: str, cycle_number: int, length_in_weeks: Optional[int] = None) -> Cycle:
        """
        Parse plan text into a Cycle.

        ``length_in_weeks`` overrides the week count taken from the headers
        (used when the length comes from elsewhere, e.g. a short prompt).

        Raises InvalidPlanInputError for empty text or a bad cycle number and
        NoWorkoutsParsedError when no workout with exercises was found. Lines
        and sections that don't parse are skipped and recorded in
        ``self.warnings``.
        """
        self._reset()
        self._check_cycle_number(cycle_number)
        if not text or not text.strip():
            raise InvalidPlanInputError("Plan text is empty")

        weeks = split_weeks(text, self.find_week_headers(text))
        total_weeks = length_in_weeks or weeks.total_weeks
        logger.info(f"Parsed cycle length: {total_weeks} weeks ({len(weeks.week_headers)} week headers)")

        extractor = OverrideExtractor(self, text, weeks.week_headers, total_weeks)
        # A lone header (or none) means the plan never spelled out later weeks
        if len(weeks.week_headers) > 1:
            for week in extractor.missing_weeks:
                self.add_warning(f"Week {week} header not found; week {week} will use progression")

        sections = split_workouts(weeks.week_one, self.find_workout_headers(weeks.week_one))
        if not sections:
            self.add_warning("No workout headers (e.g. 'DAY 1 — Push A') found in week 1")

        cycle_id = self.id_factory()
        templates: List[WorkoutTemplate] = []
        seen: Set[Tuple[str, Optional[int]]] = set()

        for section in sections:
            exercises = self._parse_section(section, extractor)
            name = section.header.name
            if not exercises:
                self.add_warning(f"No exercises parsed for workout '{name}'")
                continue
            workout_type = map_workout_type(workout_type_from_header(name))
            self._add_template(templates, seen, cycle_id, name, exercises, workout_type)

        return self._build_cycle(cycle_id, cycle_number, total_weeks, templates)

    def _parse_section(
        self,
        section: Section,
        extractor: OverrideExtractor,
    ) -> List[WorkoutTemplateExercise]:
        exercises: List[WorkoutTemplateExercise] = []

        for line in section.text.split('\n')[1:]:
            if not self.is_exercise_candidate(line) or not any(c.isalnum() for c in line):
                continue

            result = self.parse_exercise_line(line)
            if not result.matched:
                self.add_warning(f"Skipped line in '{section.header.name}': {result.line.strip()!r} ({result.reason})")
                continue

            parsed = result.exercise
            logger.debug(f"Parsed: {parsed.name} - {parsed.sets}×{parsed.raw_reps} @ {parsed.weight}")
            exercise = self.resolver.resolve(parsed.name)

            weekly_overrides, progression_delta = extractor.extract(parsed)

            exercises.append(WorkoutTemplateExercise(
                id=self.id_factory(),
                exercise_id=exercise.id,
                exercise_name=exercise.name,
                order_index=len(exercises),
                target_sets=parsed.sets,
                target_reps_min=parsed.reps_min,
                target_reps_max=parsed.reps_max,
                target_weight=parsed.weight,
                progression_type=ProgressionType.WEIGHT,
                progression_value=progression_delta or default_progression_value(parsed.weight),
                weekly_overrides=weekly_overrides,
            ))

        return exercises
