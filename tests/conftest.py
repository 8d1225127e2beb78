"""
Test fixtures for cycle-ingestor-api.

Provides a fixed clock, deterministic ids and a seeded exercise library so
parses are reproducible, plus a FastAPI client backed by a fresh service.
"""

import itertools
import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Make src/ importable so tests can do `import cycle_ingestor_api...`
for p in {ROOT, SRC}:
    p_str = str(p)
    if p_str not in sys.path:
        sys.path.insert(0, p_str)

from cycle_ingestor_api.api import routes
from cycle_ingestor_api.main import app
from cycle_ingestor_api.models import Equipment, Exercise, ExerciseCategory
from cycle_ingestor_api.parsers import PlanParser, StructuredPlanParser
from cycle_ingestor_api.services.exercise_library import ExerciseResolver, InMemoryExerciseLibrary
from cycle_ingestor_api.services.plan_service import PlanIngestionService


FIXED_NOW = datetime(2025, 1, 6, 9, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Deterministic collaborators
# ---------------------------------------------------------------------------


@pytest.fixture
def fixed_clock():
    """Clock that always returns FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def id_factory():
    """Sequential ids: '1', '2', '3', ..."""
    counter = itertools.count(1)
    return lambda: str(next(counter))


@pytest.fixture
def library() -> InMemoryExerciseLibrary:
    """Library holding a couple of pre-existing exercises."""
    return InMemoryExerciseLibrary([
        Exercise(
            id="lib-bench",
            name="Bench Press",
            category=ExerciseCategory.CHEST,
            equipment=Equipment.BARBELL,
        ),
        Exercise(
            id="lib-squat",
            name="Squats",
            category=ExerciseCategory.LEGS,
            equipment=Equipment.BARBELL,
        ),
    ])


@pytest.fixture
def resolver(library, id_factory) -> ExerciseResolver:
    return ExerciseResolver(library, id_factory=id_factory)


@pytest.fixture
def plan_parser(resolver, fixed_clock, id_factory) -> PlanParser:
    return PlanParser(resolver, clock=fixed_clock, id_factory=id_factory)


@pytest.fixture
def structured_parser(resolver, fixed_clock, id_factory) -> StructuredPlanParser:
    return StructuredPlanParser(resolver, clock=fixed_clock, id_factory=id_factory)


@pytest.fixture
def plan_service(library, fixed_clock, id_factory) -> PlanIngestionService:
    return PlanIngestionService(library, clock=fixed_clock, id_factory=id_factory)


# ---------------------------------------------------------------------------
# API client
# ---------------------------------------------------------------------------


@pytest.fixture
def client(plan_service, monkeypatch) -> TestClient:
    """Per-test FastAPI TestClient with its own exercise library."""
    monkeypatch.setattr(routes, "plan_service", plan_service)
    return TestClient(app)


# ---------------------------------------------------------------------------
# Sample plans
# ---------------------------------------------------------------------------


THREE_WEEK_PLAN = """\
⭐️ WEEK 1
DAY 1 — Push A
- Bench Press: 4 × 6-8 @ 50kg
- Overhead Press: 3 × 8-10 @ 35kg
- Push-ups: 3 × 12 @ BW

DAY 2 — Pull A
• Barbell Rows: 3 × 8-10 @ 50kg
• Pull-ups: 3 × 8-10
• Bicep Curls — 3 × 10-12 @ 12.5-15 lb

DAY 3 — Legs A
- Squats: 4 × 6-8 @ 100kg
- Plank: 3 × 45 sec @ BW
- Lunges: 3 × 10 @ light

⭐️ WEEK 2 (formerly Week 3)
DAY 1 — Push A
- Bench Press: 4 × 6-8 @ 52.5kg
- Overhead Press: 3 × 8-10 @ 37.5kg
- Push-ups: 3 × 15 @ BW

DAY 3 — Legs A
- Squats: 4 × 6-8 @ 105kg
- Plank: 3 × 60 sec @ BW

⭐️ WEEK 3
DAY 1 — Push A
- Bench Press: 5 × 5 @ 55kg
DAY 3 — Legs A
- Squats: 5 × 5 @ 110kg
"""


@pytest.fixture
def three_week_plan() -> str:
    return THREE_WEEK_PLAN
