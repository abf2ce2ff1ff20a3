# 📦 /services/matcher_service.py

from typing import List, Optional, Sequence, Tuple

from prometheus_client import Counter

from engine.care_plan import build_care_plan
from engine.matcher import ProviderMatcher
from schemas.assessment import AssessmentData
from schemas.care_plan import PriorityLevel, Recommendations
from schemas.provider import Provider, ProviderMatch

ASSESSMENT_COUNTER = Counter("ministrycare_assessments_total", "Total assessments turned into care plans", ["persisted"])
CARE_PLANS_CREATED_COUNTER = Counter("ministrycare_care_plans_created_total", "Care plans stored as the active plan", ["priority"])
MATCH_REQUEST_COUNTER = Counter("ministrycare_match_requests_total", "Total provider match requests")
MATCHES_RETURNED_COUNTER = Counter("ministrycare_matches_returned", "Number of provider matches returned")
EXCLUDED_COUNTER = Counter("ministrycare_providers_excluded", "Providers dropped for a zero match score")
STORE_FAILURE_COUNTER = Counter("ministrycare_store_failures_total", "Failed Supabase operations", ["operation"])


def run_care_plan_generation(assessment: AssessmentData, persisted: bool = False) -> Tuple[Recommendations, PriorityLevel]:
    ASSESSMENT_COUNTER.labels(str(persisted).lower()).inc()
    return build_care_plan(assessment)


def run_matcher(assessment: AssessmentData, providers: Sequence[Provider], top_n: Optional[int] = None) -> List[ProviderMatch]:
    MATCH_REQUEST_COUNTER.inc()
    matcher = ProviderMatcher(assessment, providers)
    matches = matcher.run(top_n=top_n)

    if matcher.excluded:
        EXCLUDED_COUNTER.inc(matcher.excluded)
    if matches:
        MATCHES_RETURNED_COUNTER.inc(len(matches))
    return matches
