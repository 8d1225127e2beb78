"""
Structured Parser

Builds a Cycle from a plan that is already split into workouts and
exercises, e.g. the JSON an external generation service returns:

    {"cycleLength": 8, "workoutsPerWeek": 3,
     "workouts": [{"name": "Push A", "exercises": [
         {"name": "Bench Press", "sets": 4, "repsMin": 6, "repsMax": 8, "weight": 50}]}]}

Skips the text grammar entirely; exercise resolution, weekday assignment and
duplicate suppression are shared with the text parser so both paths produce
the same Cycle shape.
"""

import logging
from typing import Any, Dict, List, Optional, Set, Tuple, Union

from pydantic import ValidationError

from ..models import (
    Cycle,
    ProgressionType,
    StructuredPlan,
    WorkoutTemplate,
    WorkoutTemplateExercise,
)
from ..services.day_assignment import map_workout_type
from .base import InvalidPlanInputError
from .plan_parser import CycleAssembler

logger = logging.getLogger(__name__)

# Weekly increment applied to every exercise that arrives pre-structured
STRUCTURED_PROGRESSION_VALUE = 2.5


class StructuredPlanParser(CycleAssembler):
    """Parser for pre-structured plan objects"""

    def parse(self, data: Union[StructuredPlan, Dict[str, Any]], cycle_number: int) -> Cycle:
        self._reset()
        self._check_cycle_number(cycle_number)
        plan = self._validate(data)
        logger.info(f"Parsing structured plan: {plan.cycle_length} weeks, {len(plan.workouts)} workouts")

        cycle_id = self.id_factory()
        templates: List[WorkoutTemplate] = []
        seen: Set[Tuple[str, Optional[int]]] = set()

        for workout in plan.workouts:
            exercises = []
            for index, ex in enumerate(workout.exercises):
                exercise = self.resolver.resolve(ex.name)
                exercises.append(WorkoutTemplateExercise(
                    id=self.id_factory(),
                    exercise_id=exercise.id,
                    exercise_name=exercise.name,
                    order_index=index,
                    target_sets=ex.sets,
                    target_reps_min=ex.reps_min,
                    target_reps_max=ex.reps_max if ex.reps_max is not None else ex.reps_min,
                    target_weight=ex.weight,
                    progression_type=ProgressionType.WEIGHT,
                    progression_value=STRUCTURED_PROGRESSION_VALUE,
                ))

            if not exercises:
                self.add_warning(f"No exercises in workout '{workout.name}'")
                continue
            name = workout.name.strip()
            self._add_template(templates, seen, cycle_id, name, exercises, map_workout_type(name))

        return self._build_cycle(
            cycle_id,
            cycle_number,
            plan.cycle_length,
            templates,
            workouts_per_week=plan.workouts_per_week or len(plan.workouts),
        )

    def _validate(self, data: Union[StructuredPlan, Dict[str, Any]]) -> StructuredPlan:
        if isinstance(data, StructuredPlan):
            plan = data
        else:
            try:
                plan = StructuredPlan.model_validate(data)
            except ValidationError as e:
                raise InvalidPlanInputError(f"Invalid structured plan: {e}") from e

        if not plan.cycle_length or plan.cycle_length < 1:
            raise InvalidPlanInputError("Structured plan is missing a positive cycleLength")
        if not plan.workouts:
            raise InvalidPlanInputError("Structured plan has no workouts")
        return plan
