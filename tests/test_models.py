"""Unit tests for data models."""
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from cycle_ingestor_api.models import (
    Cycle,
    Exercise,
    StructuredPlan,
    WeeklyOverride,
    WorkoutTemplate,
    WorkoutTemplateExercise,
)


class TestModels:
    """Test cases for data models."""

    def test_exercise_defaults(self):
        """Synthesized exercises default to Other / Dumbbell."""
        exercise = Exercise(id="ex-1", name="Zercher Squat")
        assert exercise.category == "Other"
        assert exercise.equipment == "Dumbbell"
        assert exercise.is_custom is False

    def test_template_exercise_accepts_textual_values(self):
        ex = WorkoutTemplateExercise(
            id="1",
            exercise_id="ex-1",
            target_sets=3,
            target_reps_min="45 sec",
            target_reps_max="45 sec",
            target_weight="light",
        )
        assert ex.target_reps_min == "45 sec"
        assert ex.target_weight == "light"

    def test_template_exercise_requires_a_set(self):
        with pytest.raises(ValidationError):
            WorkoutTemplateExercise(id="1", exercise_id="ex-1", target_sets=0)

    def test_weekly_override_fields_optional(self):
        override = WeeklyOverride(target_weight=105)
        assert override.target_sets is None
        assert override.target_reps_min is None

    def test_day_of_week_range(self):
        WorkoutTemplate(id="t", cycle_id="c", name="Push A", day_of_week=7)
        with pytest.raises(ValidationError):
            WorkoutTemplate(id="t", cycle_id="c", name="Push A", day_of_week=8)

    def test_cycle_number_positive(self):
        now = datetime(2025, 1, 6, tzinfo=timezone.utc)
        with pytest.raises(ValidationError):
            Cycle(id="c", cycle_number=0, start_date=now, length_in_weeks=4, end_date=now)

    def test_structured_plan_aliases(self):
        plan = StructuredPlan.model_validate({
            "cycleLength": 4,
            "workoutsPerWeek": 3,
            "workouts": [{"name": "Push A", "exercises": [{"name": "Bench Press", "repsMin": 6, "repsMax": 8}]}],
        })
        assert plan.cycle_length == 4
        assert plan.workouts[0].exercises[0].reps_max == 8
        # Field names work too
        assert StructuredPlan(cycle_length=2).cycle_length == 2
