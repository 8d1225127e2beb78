"""Data models for training cycle ingestion."""
from datetime import datetime
from enum import Enum
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

# Reps may be a count or a textual token such as "45 sec"
RepsValue = Union[int, str]
# Weight may be a load (0 = bodyweight) or a qualitative token such as "light"
WeightValue = Union[float, str]


class WorkoutType(str, Enum):
    """Closed set of workout types a template can carry."""
    PUSH = "Push"
    PULL = "Pull"
    LEGS = "Legs"
    FULL_BODY = "Full Body"
    OTHER = "Other"


class ExerciseCategory(str, Enum):
    CHEST = "Chest"
    BACK = "Back"
    LEGS = "Legs"
    SHOULDERS = "Shoulders"
    ARMS = "Arms"
    CORE = "Core"
    FULL_BODY = "FullBody"
    OTHER = "Other"


class Equipment(str, Enum):
    BARBELL = "Barbell"
    BODYWEIGHT = "Bodyweight"
    DUMBBELL = "Dumbbell"
    MACHINE = "Machine"


class ProgressionType(str, Enum):
    """How an exercise's targets move from week to week."""
    WEIGHT = "weight"
    REPS = "reps"
    DOUBLE = "double"   # Currently applied exactly like WEIGHT
    NONE = "none"


class Exercise(BaseModel):
    """An entry in the exercise library."""
    id: str
    name: str
    category: ExerciseCategory = ExerciseCategory.OTHER
    equipment: Equipment = Equipment.DUMBBELL
    is_custom: bool = False

    class Config:
        use_enum_values = True


class WeeklyOverride(BaseModel):
    """Exact values the author wrote for one specific week."""
    target_weight: Optional[WeightValue] = None
    target_sets: Optional[int] = None
    target_reps_min: Optional[RepsValue] = None
    target_reps_max: Optional[RepsValue] = None


class WorkoutTemplateExercise(BaseModel):
    """One exercise slot inside a workout template."""
    id: str
    exercise_id: str
    exercise_name: Optional[str] = None
    order_index: int = 0
    target_sets: int = Field(default=1, ge=1)
    target_reps_min: RepsValue = 10
    target_reps_max: Optional[RepsValue] = None
    target_weight: WeightValue = 0
    progression_type: ProgressionType = ProgressionType.NONE
    progression_value: Optional[float] = Field(
        default=None,
        description="Increment per week; only meaningful for weight/reps/double progression",
    )
    weekly_overrides: Optional[Dict[int, WeeklyOverride]] = Field(
        default=None,
        description="Week number -> exact values as stated by the author",
    )

    class Config:
        use_enum_values = True


class WorkoutTemplate(BaseModel):
    """A named training day within a cycle, e.g. 'Push A'."""
    id: str
    cycle_id: str
    name: str
    workout_type: WorkoutType = WorkoutType.OTHER
    day_of_week: Optional[int] = Field(default=None, ge=1, le=7, description="1 = Monday, 7 = Sunday")
    order_index: int = 0
    exercises: List[WorkoutTemplateExercise] = Field(default_factory=list)

    class Config:
        use_enum_values = True


class Cycle(BaseModel):
    """A multi-week training block."""
    id: str
    cycle_number: int = Field(..., ge=1)
    start_date: datetime
    length_in_weeks: int = Field(..., ge=1)
    end_date: datetime
    workouts_per_week: int = 0
    is_active: bool = True
    workout_templates: List[WorkoutTemplate] = Field(default_factory=list)
    created_at: Optional[datetime] = None


class EffectiveTargets(BaseModel):
    """Targets for one exercise in one specific week."""
    target_weight: WeightValue
    target_sets: int
    target_reps_min: RepsValue
    target_reps_max: RepsValue


# ---------------------------------------------------------------------------
# Pre-structured input (e.g. returned by an external generation service)
# ---------------------------------------------------------------------------

class StructuredExercise(BaseModel):
    name: str
    sets: int = Field(default=3, ge=1)
    reps_min: RepsValue = Field(default=10, alias="repsMin")
    reps_max: Optional[RepsValue] = Field(default=None, alias="repsMax")
    weight: WeightValue = 0

    class Config:
        populate_by_name = True
        extra = "ignore"


class StructuredWorkout(BaseModel):
    name: str
    exercises: List[StructuredExercise] = Field(default_factory=list)

    class Config:
        extra = "ignore"


class StructuredPlan(BaseModel):
    """Plan already broken into workouts and exercises."""
    cycle_length: Optional[int] = Field(default=None, alias="cycleLength")
    workouts_per_week: Optional[int] = Field(default=None, alias="workoutsPerWeek")
    workouts: List[StructuredWorkout] = Field(default_factory=list)

    class Config:
        populate_by_name = True
        extra = "ignore"


class IngestionResult(BaseModel):
    """A built cycle plus everything the parser skipped on the way"""
    cycle: Cycle
    warnings: List[str] = Field(default_factory=list)
    detected_format: Literal["plan_text", "prompt", "structured"] = "plan_text"
