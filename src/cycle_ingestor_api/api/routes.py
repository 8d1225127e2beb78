"""API routes for training cycle ingestion."""

import logging
from typing import Any, Dict

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from cycle_ingestor_api.config import settings
from cycle_ingestor_api.models import EffectiveTargets, WorkoutTemplateExercise
from cycle_ingestor_api.parsers import InvalidPlanInputError, NoWorkoutsParsedError
from cycle_ingestor_api.services.plan_service import PlanIngestionService
from cycle_ingestor_api.services.progression import calculate_weekly_progression

logger = logging.getLogger(__name__)

router = APIRouter()

# One library shared by every request; the service's resolver serializes
# lookups and inserts against it.
plan_service = PlanIngestionService()


def get_plan_service() -> PlanIngestionService:
    return plan_service


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class ParsePlanRequest(BaseModel):
    """Request model for POST /plans/parse"""
    text: str = Field(..., max_length=settings.MAX_PLAN_LENGTH, description="Plan text or a short prompt")
    cycle_number: int = Field(..., description="Cycle number to stamp on the result")


class StructuredPlanRequest(BaseModel):
    """Request model for POST /plans/structured"""
    plan: Dict[str, Any] = Field(..., description="{cycleLength, workoutsPerWeek, workouts: [...]}")
    cycle_number: int


class ProgressionRequest(BaseModel):
    """Request model for POST /plans/progression"""
    exercise: WorkoutTemplateExercise
    week: int = Field(..., ge=1)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@router.get("/health")
def health():
    """Health check endpoint."""
    return {"ok": True}


@router.post("/plans/parse")
def parse_plan(request: ParsePlanRequest) -> JSONResponse:
    """
    Parse a formatted plan (or a short prompt) into a cycle.

    ## Response
    - **cycle**: weeks, workout templates and per-exercise targets
    - **warnings**: lines and sections that were skipped
    - **detected_format**: "plan_text" or "prompt"
    """
    try:
        result = get_plan_service().ingest_text(request.text, request.cycle_number)
    except InvalidPlanInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NoWorkoutsParsedError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return JSONResponse(result.model_dump(mode="json"))


@router.post("/plans/structured")
def parse_structured_plan(request: StructuredPlanRequest) -> JSONResponse:
    """Build a cycle from an already-structured plan object (bypasses text parsing)."""
    try:
        result = get_plan_service().ingest_structured(request.plan, request.cycle_number)
    except InvalidPlanInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NoWorkoutsParsedError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return JSONResponse(result.model_dump(mode="json"))


@router.post("/plans/progression", response_model=EffectiveTargets)
def weekly_progression(request: ProgressionRequest) -> EffectiveTargets:
    """Effective weight/sets/reps for one exercise in one week."""
    return calculate_weekly_progression(request.exercise, request.week)
