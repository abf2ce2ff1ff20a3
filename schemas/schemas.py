# 📦 /schemas/schemas.py
# ─────────────────────────────
# Request / response envelopes for the HTTP API

from pydantic import BaseModel
from typing import List, Optional

from schemas.care_plan import CarePlan, PriorityLevel, Recommendations
from schemas.provider import Provider, ProviderMatch


class CarePlanPreview(BaseModel):
    priority_level: PriorityLevel
    recommendations: Recommendations


class CarePlanPreviewResponse(BaseModel):
    status: str
    data: CarePlanPreview


class CarePlanResponse(BaseModel):
    status: str
    data: CarePlan


class CarePlanListResponse(BaseModel):
    status: str
    data: List[CarePlan]


class MatchPreviewRequest(BaseModel):
    assessment: dict
    providers: List[Provider]


class RecommendedProvidersResponse(BaseModel):
    status: str
    care_plan_id: Optional[str] = None
    data: List[ProviderMatch]


class HealthCheckResponse(BaseModel):
    status: str
    message: str
    version: str


class ErrorResponse(BaseModel):
    status: str
    message: str
    info: Optional[str | dict | list] = None
