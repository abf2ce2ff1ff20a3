import sys

from config import settings
from engine.care_plan import build_care_plan
from schemas.assessment import normalize_assessment
from services.care_plan_store import CarePlanStore
from supabase_client import get_supabase

# Screening-shape assessment of a leader under heavy strain
MOCK_ASSESSMENT = {
    "stressLevel": 8,
    "sleepQuality": "Poor",
    "workLifeBalance": "Very Unbalanced",
    "physicalActivity": "Rarely",
    "concerns": ["Burnout", "Anxiety", "Work-Life Balance", "Sleep Issues", "Compassion Fatigue"],
    "supportSystem": "Limited",
    "previousCounseling": True,
    "willingToSeek": True,
    "insuranceType": "Blue Cross Blue Shield",
    "preferredFormat": "Both in-person and virtual",
    "faithIntegration": True,
    "denomination": "Non-denominational",
    "timeCommitment": "Weekend retreat or intensive",
    "specificGoals": "Address burnout from ministry demands, improve sleep, establish better boundaries",
}


def create_mock_care_plan(store: CarePlanStore, user_id: str, raw_assessment: dict = MOCK_ASSESSMENT):
    """Store a generated care plan for user_id, superseding any active plan."""
    assessment = normalize_assessment(raw_assessment)
    recommendations, priority_level = build_care_plan(assessment)
    return store.create_care_plan(user_id, assessment, recommendations, priority_level)


def main(user_id):
    store = CarePlanStore(get_supabase(), insert_retries=settings.insert_retries, retry_delay=settings.retry_delay)
    plan = create_mock_care_plan(store, user_id)
    recs = plan.recommendations
    print(f"Created care plan {plan.id} ({plan.priority_level} priority, status {plan.status})")
    print(f"- {len(recs.immediate)} immediate actions")
    print(f"- {len(recs.short_term)} short-term recommendations")
    print(f"- {len(recs.long_term)} long-term goals")
    print(f"- {len(recs.resources)} resources")

if __name__ == "__main__":
    if len(sys.argv) != 2:
        sys.exit("usage: python -m scripts.create_mock_care_plan <user_id>")
    main(sys.argv[1])
