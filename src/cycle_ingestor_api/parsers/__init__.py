"""Plan text and structured-plan parsers."""
from .base import (
    BaseParser,
    InvalidPlanInputError,
    NoWorkoutsParsedError,
    PlanIngestionError,
)
from .plan_parser import PlanParser
from .structured_parser import StructuredPlanParser

__all__ = [
    "BaseParser",
    "InvalidPlanInputError",
    "NoWorkoutsParsedError",
    "PlanIngestionError",
    "PlanParser",
    "StructuredPlanParser",
]
