from fastapi import APIRouter, Body, Depends, Query
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError
import structlog

from api.dependencies import get_current_user, get_store
from config import settings
from schemas.assessment import normalize_assessment
from schemas.schemas import (
    CarePlanListResponse,
    CarePlanPreview,
    CarePlanPreviewResponse,
    CarePlanResponse,
    ErrorResponse,
    HealthCheckResponse,
    MatchPreviewRequest,
    RecommendedProvidersResponse,
)
from services.care_plan_store import CarePlanStore
from services.matcher_service import (
    CARE_PLANS_CREATED_COUNTER,
    STORE_FAILURE_COUNTER,
    run_care_plan_generation,
    run_matcher,
)
from utils.fetch_providers import fetch_providers
from utils.supabase_utils import StoreError

log = structlog.get_logger()

router = APIRouter()

ERROR_RESPONSES = {
    404: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _error(status_code: int, message: str, info=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(status="error", message=message, info=info).model_dump(),
    )


def _parse_assessment(raw):
    """Returns (assessment, None) or (None, 422 response)."""
    try:
        return normalize_assessment(raw), None
    except ValidationError as e:
        return None, _error(422, "Invalid assessment.", e.errors(include_url=False, include_context=False, include_input=False))
    except ValueError as e:
        return None, _error(422, "Invalid assessment.", str(e))


@router.get("/", response_model=HealthCheckResponse)
async def healthcheck():
    return HealthCheckResponse(
        status="ok",
        message="MinistryCare recommender live",
        version=settings.version,
    )


@router.post("/care-plans/preview", response_model=CarePlanPreviewResponse, responses=ERROR_RESPONSES)
async def preview_care_plan(assessment: dict = Body(...)):
    parsed, error = _parse_assessment(assessment)
    if error:
        return error

    recommendations, priority_level = run_care_plan_generation(parsed)
    return CarePlanPreviewResponse(
        status="success",
        data=CarePlanPreview(priority_level=priority_level, recommendations=recommendations),
    )


@router.post("/care-plans", status_code=201, response_model=CarePlanResponse, responses=ERROR_RESPONSES)
def create_care_plan(
    assessment: dict = Body(...),
    user_id: str = Depends(get_current_user),
    store: CarePlanStore = Depends(get_store),
):
    parsed, error = _parse_assessment(assessment)
    if error:
        return error

    recommendations, priority_level = run_care_plan_generation(parsed, persisted=True)

    try:
        plan = store.create_care_plan(user_id, parsed, recommendations, priority_level)
    except StoreError as e:
        STORE_FAILURE_COUNTER.labels("create_care_plan").inc()
        log.error("Failed to create care plan", user_id=user_id, error=str(e))
        return _error(500, "Failed to create care plan. Please try again.", str(e))

    CARE_PLANS_CREATED_COUNTER.labels(priority_level).inc()
    return CarePlanResponse(status="success", data=plan)


@router.get("/care-plans", response_model=CarePlanListResponse, responses=ERROR_RESPONSES)
def list_care_plans(
    user_id: str = Depends(get_current_user),
    store: CarePlanStore = Depends(get_store),
):
    try:
        plans = store.list_care_plans(user_id)
    except StoreError as e:
        STORE_FAILURE_COUNTER.labels("list_care_plans").inc()
        return _error(500, "Failed to load care plans.", str(e))
    return CarePlanListResponse(status="success", data=plans)


@router.get("/care-plans/active", response_model=CarePlanResponse, responses=ERROR_RESPONSES)
def get_active_care_plan(
    user_id: str = Depends(get_current_user),
    store: CarePlanStore = Depends(get_store),
):
    try:
        plan = store.get_active_care_plan(user_id)
    except StoreError as e:
        STORE_FAILURE_COUNTER.labels("get_active_care_plan").inc()
        return _error(500, "Failed to load care plan.", str(e))

    if plan is None:
        return _error(404, "No active care plan. Complete the assessment to generate one.")
    return CarePlanResponse(status="success", data=plan)


@router.get("/recommended-providers", response_model=RecommendedProvidersResponse, responses=ERROR_RESPONSES)
async def recommended_providers(
    top_n: int | None = Query(None, ge=1, le=10),
    user_id: str = Depends(get_current_user),
    store: CarePlanStore = Depends(get_store),
):
    try:
        plan = await run_in_threadpool(store.get_active_care_plan, user_id)
        if plan is None:
            return _error(404, "No active care plan. Complete the assessment to get recommendations.")
        providers = await fetch_providers(store, delay=settings.retry_delay)
    except StoreError as e:
        STORE_FAILURE_COUNTER.labels("recommended_providers").inc()
        log.error("Failed to load data for provider matching", user_id=user_id, error=str(e))
        return _error(500, "Failed to load providers.", str(e))

    matches = run_matcher(plan.assessment_data, providers, top_n=top_n)
    return RecommendedProvidersResponse(status="success", care_plan_id=plan.id, data=matches)


@router.post("/recommended-providers/preview", response_model=RecommendedProvidersResponse, responses=ERROR_RESPONSES)
async def preview_recommended_providers(
    request: MatchPreviewRequest,
    top_n: int | None = Query(None, ge=1, le=10),
):
    parsed, error = _parse_assessment(request.assessment)
    if error:
        return error

    matches = run_matcher(parsed, request.providers, top_n=top_n)
    return RecommendedProvidersResponse(status="success", data=matches)
