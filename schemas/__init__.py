from .assessment import AssessmentData, CarePreferences, normalize_assessment
from .care_plan import CarePlan, RecommendationItem, Recommendations
from .provider import Provider, ProviderMatch

__all__ = [
    "AssessmentData",
    "CarePreferences",
    "normalize_assessment",
    "CarePlan",
    "RecommendationItem",
    "Recommendations",
    "Provider",
    "ProviderMatch",
]
