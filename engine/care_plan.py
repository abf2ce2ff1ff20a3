# 📦 engine/care_plan.py
# ─────────────────────────────
# Care plan generation: recommendations + priority level from an assessment

from typing import Tuple

from schemas.assessment import AssessmentData
from schemas.care_plan import PriorityLevel, RecommendationItem, Recommendations

URGENT_STRESS = {"severe", "crisis"}

PRIORITY_BY_STRESS = {
    "crisis": "urgent",
    "severe": "high",
    "moderate": "medium",
}


def determine_priority_level(assessment: AssessmentData) -> PriorityLevel:
    """Priority derived from the self-reported stress category (default low)."""
    return PRIORITY_BY_STRESS.get(assessment.stress_category, "low")


def generate_recommendations(assessment: AssessmentData) -> Recommendations:
    """Apply the recommendation rules in order; every rule only appends."""
    recs = Recommendations()

    if assessment.stress_category in URGENT_STRESS:
        recs.immediate.append(RecommendationItem(
            title="Immediate Support",
            description="Consider reaching out to a crisis helpline or emergency services if you are in immediate danger.",
            priority="urgent",
        ))

    if assessment.preferences.faith_based:
        recs.short_term.append(RecommendationItem(
            title="Faith-Based Counseling",
            description="Connect with a mental health professional who can integrate your faith perspective into treatment.",
        ))

    if assessment.preferences.telehealth:
        recs.short_term.append(RecommendationItem(
            title="Telehealth Options",
            description="Explore online therapy options for flexible scheduling and convenience.",
        ))

    if "Burnout" in assessment.concerns:
        recs.short_term.append(RecommendationItem(
            title="Burnout Prevention",
            description="Work with a therapist on establishing healthy boundaries and self-care routines.",
        ))
        recs.resources.append(RecommendationItem(
            title="Sabbath and Rest Practices",
            description="Resources for implementing regular rest and renewal practices.",
        ))

    if "Compassion Fatigue" in assessment.concerns:
        recs.long_term.append(RecommendationItem(
            title="Compassion Fatigue Management",
            description="Develop sustainable caregiving practices and emotional resilience strategies.",
        ))

    recs.long_term.append(RecommendationItem(
        title="Regular Therapy",
        description="Establish a consistent therapeutic relationship for ongoing support.",
    ))
    recs.resources.append(RecommendationItem(
        title="Support Groups",
        description="Connect with other ministry leaders facing similar challenges.",
    ))

    return recs


def build_care_plan(assessment: AssessmentData) -> Tuple[Recommendations, PriorityLevel]:
    """Recommendations and priority for a completed assessment. Pure."""
    return generate_recommendations(assessment), determine_priority_level(assessment)
