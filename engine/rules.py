# 📦 engine/rules.py
# ─────────────────────────────
# Provider match rules, evaluated in RULES order
#
# Each rule returns (points, reason) when it fires, else None.
# Absent assessment fields never fire a rule.

from typing import Optional, Tuple

from schemas.assessment import AssessmentData
from schemas.provider import Provider

RuleResult = Optional[Tuple[int, str]]


def _first_two(items) -> str:
    return " and ".join(list(items)[:2])


def _overlaps(concern: str, specialty: str) -> bool:
    c, s = concern.lower(), specialty.lower()
    return c in s or s in c


def concern_overlap(a: AssessmentData, p: Provider, points: dict, thresholds: dict) -> RuleResult:
    """Concerns matching a specialty (substring either way, case-insensitive)."""
    matched = [c for c in a.concerns if any(_overlaps(c, s) for s in p.specialties)]
    if not matched:
        return None
    return points["concern"] * len(matched), f"Specializes in {_first_two(matched)}"


def faith_integration(a, p, points, thresholds) -> RuleResult:
    if a.faith_integration and p.denominations:
        return points["faith_integration"], "Offers faith-integrated care"
    return None


def denomination(a, p, points, thresholds) -> RuleResult:
    if a.denomination and a.denomination in p.denominations:
        return points["denomination"], f"Familiar with {a.denomination} traditions"
    return None


def insurance(a, p, points, thresholds) -> RuleResult:
    if a.insurance_type and a.insurance_type in p.insurance_accepted:
        return points["insurance"], f"Accepts {a.insurance_type}"
    return None


def virtual_format(a, p, points, thresholds) -> RuleResult:
    if a.preferred_format and "virtual" in a.preferred_format.lower() \
            and p.location_type in {"virtual", "both"}:
        return points["virtual_format"], "Offers virtual/telehealth sessions"
    return None


def in_person_format(a, p, points, thresholds) -> RuleResult:
    if a.preferred_format and "in-person" in a.preferred_format.lower() \
            and p.location_type in {"in-person", "both"}:
        return points["in_person_format"], "Offers in-person sessions"
    return None


def retreat(a, p, points, thresholds) -> RuleResult:
    if a.time_commitment and "retreat" in a.time_commitment.lower() and p.retreat_facilitated:
        return points["retreat"], "Facilitates retreats for ministry leaders"
    return None


def weekend_intensive(a, p, points, thresholds) -> RuleResult:
    if a.time_commitment and "weekend" in a.time_commitment.lower() \
            and any("weekend" in d.lower() for d in p.service_durations):
        return points["weekend_intensive"], "Offers weekend intensive programs"
    return None


def high_stress_therapists(a, p, points, thresholds) -> RuleResult:
    """Only the numeric (0-10) stress score can fire this rule."""
    if a.stress_score is not None and a.stress_score >= thresholds["high_stress"] \
            and p.actual_therapists:
        return points["high_stress_therapists"], "Licensed therapists on staff for high-stress situations"
    return None


def high_rating(a, p, points, thresholds) -> RuleResult:
    if p.rating >= thresholds["high_rating"]:
        return points["high_rating"], f"Highly rated ({p.rating:.1f}/5.0)"
    return None


def content_resources(a, p, points, thresholds) -> RuleResult:
    if p.content_resources and p.content_resources_list:
        return points["content_resources"], f"Provides {_first_two(p.content_resources_list)}"
    return None


def relational_support(a, p, points, thresholds) -> RuleResult:
    if p.general_relational_support:
        return points["relational_support"], f"Offers {_first_two(p.general_relational_support)}"
    return None


def benevolence(a, p, points, thresholds) -> RuleResult:
    if p.benevolence_request:
        return points["benevolence"], "Financial assistance available"
    return None


RULES = [
    concern_overlap,
    faith_integration,
    denomination,
    insurance,
    virtual_format,
    in_person_format,
    retreat,
    weekend_intensive,
    high_stress_therapists,
    high_rating,
    content_resources,
    relational_support,
    benevolence,
]
