# 📦 /schemas/assessment.py
# ─────────────────────────────
# Assessment records and their normalization into one canonical shape
"""
Two assessment shapes are stored in ``care_plans.assessment_data``:

* **intake**: written by the in-app form. Stress is a category
  (minimal/mild/moderate/severe/crisis), concerns live in ``primaryConcerns``
  and care preferences in a nested ``preferences`` object.
* **screening**: written by imports and seed tooling. Stress is a number on a
  0-10 scale and the matching hints (insurance, format, faith, denomination,
  time commitment) are top-level fields.

Both are validated and folded into :class:`AssessmentData`. The two stress
notions are kept in separate fields: ``stress_category`` only drives the care
plan priority, ``stress_score`` only drives the provider ``>= 7`` rule.
"""

from typing import Any, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

ASSESSMENT_SCHEMA_VERSION = 1

StressCategory = Literal["minimal", "mild", "moderate", "severe", "crisis"]
PreviousTherapy = Literal["none", "past", "current"]
AssessmentForm = Literal["intake", "screening"]


class CamelModel(BaseModel):
    """Base for JSON blobs stored with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class CarePreferences(CamelModel):
    telehealth: bool = False
    faith_based: bool = False
    group_therapy: bool = False


class IntakeAssessment(CamelModel):
    stress_level: Optional[StressCategory] = None
    primary_concerns: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("primaryConcerns", "primary_concerns", "concerns"),
        serialization_alias="primaryConcerns",
    )
    duration: Optional[str] = None
    support_system: Optional[str] = None
    previous_therapy: Optional[PreviousTherapy] = None
    specific_challenges: Optional[str] = None
    goals: Optional[str] = None
    preferences: CarePreferences = Field(default_factory=CarePreferences)

    @field_validator("stress_level", "previous_therapy", mode="before")
    @classmethod
    def _blank_is_unset(cls, v):
        return v or None


class ScreeningAssessment(CamelModel):
    stress_level: Optional[float] = Field(None, ge=0, le=10)
    concerns: List[str] = []
    sleep_quality: Optional[str] = None
    work_life_balance: Optional[str] = None
    physical_activity: Optional[str] = None
    support_system: Optional[str] = None
    previous_counseling: Optional[bool] = None
    willing_to_seek: Optional[bool] = None
    insurance_type: Optional[str] = None
    preferred_format: Optional[str] = None
    faith_integration: bool = False
    denomination: Optional[str] = None
    time_commitment: Optional[str] = None
    specific_goals: Optional[str] = None


class AssessmentData(CamelModel):
    """Canonical assessment consumed by the generator and the scorer."""
    schema_version: int = ASSESSMENT_SCHEMA_VERSION
    form: AssessmentForm

    stress_category: Optional[StressCategory] = None
    stress_score: Optional[float] = Field(None, ge=0, le=10)
    concerns: List[str] = []

    duration: Optional[str] = None
    support_system: Optional[str] = None
    previous_therapy: Optional[PreviousTherapy] = None
    specific_challenges: Optional[str] = None
    goals: Optional[str] = None
    preferences: CarePreferences = Field(default_factory=CarePreferences)

    insurance_type: Optional[str] = None
    preferred_format: Optional[str] = None
    faith_integration: bool = False
    denomination: Optional[str] = None
    time_commitment: Optional[str] = None

    @field_validator("concerns")
    @classmethod
    def _unique_concerns(cls, v):
        # Concern tags are a set; keep first-seen order for stable reasons.
        return list(dict.fromkeys(v))


def _is_number(value: str) -> bool:
    try:
        float(value)
    except ValueError:
        return False
    return True


def detect_form(raw: dict) -> AssessmentForm:
    """Tell which stored shape a raw assessment blob has."""
    form = raw.get("form")
    if form in ("intake", "screening"):
        return form
    stress = raw.get("stressLevel")
    if isinstance(stress, (int, float)) and not isinstance(stress, bool):
        return "screening"
    if isinstance(stress, str) and stress.strip() and not _is_number(stress):
        return "intake"
    if any(key in raw for key in ("primaryConcerns", "preferences")):
        return "intake"
    if any(key in raw for key in ("concerns", "insuranceType", "faithIntegration", "preferredFormat")):
        return "screening"
    return "intake"


def from_intake(intake: IntakeAssessment) -> AssessmentData:
    return AssessmentData(
        form="intake",
        stress_category=intake.stress_level,
        concerns=intake.primary_concerns,
        duration=intake.duration,
        support_system=intake.support_system,
        previous_therapy=intake.previous_therapy,
        specific_challenges=intake.specific_challenges,
        goals=intake.goals,
        preferences=intake.preferences,
    )


def from_screening(screening: ScreeningAssessment) -> AssessmentData:
    previous = None
    if screening.previous_counseling is not None:
        previous = "past" if screening.previous_counseling else "none"
    return AssessmentData(
        form="screening",
        stress_score=screening.stress_level,
        concerns=screening.concerns,
        support_system=screening.support_system,
        previous_therapy=previous,
        goals=screening.specific_goals,
        insurance_type=screening.insurance_type,
        preferred_format=screening.preferred_format,
        faith_integration=screening.faith_integration,
        denomination=screening.denomination,
        time_commitment=screening.time_commitment,
    )


def normalize_assessment(raw: Any) -> AssessmentData:
    """Validate a stored or submitted assessment blob and return the canonical record.

    Already-canonical records (carrying ``schemaVersion``) are validated as-is.
    Raises ``pydantic.ValidationError`` when the blob cannot be validated.
    """
    if isinstance(raw, AssessmentData):
        return raw
    if isinstance(raw, (IntakeAssessment, ScreeningAssessment)):
        raw = raw.model_dump(by_alias=True)
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError(f"assessment must be a JSON object, got {type(raw).__name__}")

    if "schemaVersion" in raw or "schema_version" in raw:
        return AssessmentData.model_validate(raw)

    if detect_form(raw) == "screening":
        return from_screening(ScreeningAssessment.model_validate(raw))
    return from_intake(IntakeAssessment.model_validate(raw))
