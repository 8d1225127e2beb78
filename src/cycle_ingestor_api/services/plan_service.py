"""Entry point for turning user input into a training cycle.

Formatted plan text goes straight to the text parser. A short prompt with no
workout structure is first expanded into a starter plan. Pre-structured
objects skip the text grammar entirely.
"""
import logging
from typing import Any, Dict, Optional, Union

from ..config import settings
from ..models import IngestionResult, StructuredPlan
from ..parsers import InvalidPlanInputError, PlanParser, StructuredPlanParser
from ..parsers.plan_parser import Clock
from .exercise_library import ExerciseLibrary, ExerciseResolver, IdFactory, InMemoryExerciseLibrary
from .plan_templates import build_plan_text

logger = logging.getLogger(__name__)


class PlanIngestionService:
    """Owns the exercise library and the resolver every parse goes through."""

    def __init__(
        self,
        library: Optional[ExerciseLibrary] = None,
        clock: Optional[Clock] = None,
        id_factory: Optional[IdFactory] = None,
    ):
        self.library = library if library is not None else InMemoryExerciseLibrary()
        self.clock = clock
        self.id_factory = id_factory
        self.resolver = ExerciseResolver(self.library, id_factory=id_factory)

    def _text_parser(self) -> PlanParser:
        return PlanParser(self.resolver, clock=self.clock, id_factory=self.id_factory)

    def _structured_parser(self) -> StructuredPlanParser:
        return StructuredPlanParser(self.resolver, clock=self.clock, id_factory=self.id_factory)

    def looks_formatted(self, text: str) -> bool:
        """True when the text already has workout headers or exercise lines"""
        grammar = self._text_parser()
        if grammar.WORKOUT_HEADER_PATTERN.search(text):
            return True
        return any(
            grammar.is_exercise_candidate(line) and grammar.match_exercise_line(line)
            for line in text.splitlines()
        )

    def ingest_text(self, text: str, cycle_number: int) -> IngestionResult:
        """Parse plan text, or a short prompt, into a cycle"""
        if not text or not text.strip():
            raise InvalidPlanInputError("Plan text is empty")
        if len(text) > settings.MAX_PLAN_LENGTH:
            raise InvalidPlanInputError(f"Plan text exceeds {settings.MAX_PLAN_LENGTH} characters")

        parser = self._text_parser()
        if self.looks_formatted(text):
            cycle = parser.parse(text, cycle_number)
            detected_format = "plan_text"
        else:
            logger.info("No workout structure found, expanding prompt into a starter plan")
            plan_text, weeks = build_plan_text(text, cycle_number)
            cycle = parser.parse(plan_text, cycle_number, length_in_weeks=weeks)
            detected_format = "prompt"

        return IngestionResult(cycle=cycle, warnings=list(parser.warnings), detected_format=detected_format)

    def ingest_structured(self, data: Union[StructuredPlan, Dict[str, Any]], cycle_number: int) -> IngestionResult:
        parser = self._structured_parser()
        cycle = parser.parse(data, cycle_number)
        return IngestionResult(cycle=cycle, warnings=list(parser.warnings), detected_format="structured")
