"""
Parser Models

Pydantic models for what the plan grammar recognizes: headers, exercise
lines and the per-line matched/unmatched outcome.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from ..models import RepsValue, WeightValue


class HeaderMatch(BaseModel):
    """A week or workout/day header found in plan text"""
    kind: Literal["week", "workout"]
    text: str = Field(..., description="Matched header text")
    number: int = Field(..., description="Week number or DAY number")
    name: Optional[str] = Field(default=None, description="Workout name (workout headers only)")
    offset: int = Field(..., ge=0, description="Character offset of the header line")


class ParsedExerciseLine(BaseModel):
    """Structured values pulled from a single exercise line"""
    name: str
    sets: int = Field(..., ge=1)
    reps_min: RepsValue
    reps_max: RepsValue
    weight: WeightValue = 0
    raw_reps: str = ""
    raw_weight: Optional[str] = None


class LineParseResult(BaseModel):
    """Tagged outcome of running the exercise grammar over one line"""
    matched: bool
    line: str
    exercise: Optional[ParsedExerciseLine] = None
    reason: Optional[str] = None


class Section(BaseModel):
    """A slice of the plan text owned by one header"""
    header: Optional[HeaderMatch] = None
    start: int = 0
    end: int = 0
    text: str = ""


class WeekSplit(BaseModel):
    """Result of splitting plan text by week headers"""
    total_weeks: int = Field(default=1, ge=1)
    week_headers: List[HeaderMatch] = Field(default_factory=list)
    week_one: str = ""
