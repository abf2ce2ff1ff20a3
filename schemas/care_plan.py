# 📦 /schemas/care_plan.py

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from schemas.assessment import AssessmentData, CamelModel, normalize_assessment

RECOMMENDATIONS_SCHEMA_VERSION = 1

PriorityLevel = Literal["low", "medium", "high", "urgent"]
ItemPriority = Literal["urgent", "high", "medium", "low"]
CarePlanStatus = Literal["draft", "active", "completed", "archived"]


class RecommendationItem(CamelModel):
    title: str
    description: str
    priority: Optional[ItemPriority] = None
    estimated_cost: Optional[float] = Field(None, ge=0)


class Recommendations(CamelModel):
    schema_version: int = RECOMMENDATIONS_SCHEMA_VERSION
    immediate: List[RecommendationItem] = []
    short_term: List[RecommendationItem] = []
    long_term: List[RecommendationItem] = []
    resources: List[RecommendationItem] = []

    def to_record(self) -> dict:
        """JSON blob as stored in ``care_plans.recommendations``."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class CarePlan(BaseModel):
    id: str
    user_id: str
    assessment_data: AssessmentData
    recommendations: Recommendations
    priority_level: PriorityLevel = "low"
    status: CarePlanStatus = "draft"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def _stringify_ids(cls, v):
        return str(v) if v is not None else v

    @field_validator("assessment_data", mode="before")
    @classmethod
    def _normalize_assessment(cls, v):
        return normalize_assessment(v)

    @field_validator("recommendations", mode="before")
    @classmethod
    def _empty_recommendations(cls, v):
        return v or {}
