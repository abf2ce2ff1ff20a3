# 📦 /schemas/provider.py

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

LocationType = Literal["in-person", "virtual", "both"]


class Provider(BaseModel):
    """Directory row from the ``providers`` table. Read-only for matching."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    user_id: Optional[str] = None
    name: str
    credentials: Optional[str] = None
    bio: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    location_type: LocationType = "in-person"
    location_details: Optional[str] = None

    specialties: List[str] = []
    denominations: List[str] = []
    insurance_accepted: List[str] = []
    languages: List[str] = []
    service_durations: List[str] = []
    content_resources_list: List[str] = []
    general_relational_support: List[str] = []

    accepting_new_clients: bool = True
    retreat_facilitated: bool = False
    actual_therapists: bool = False
    gloo_scholarship_available: bool = False
    benevolence_request: bool = False
    content_resources: bool = False

    rating: float = Field(0.0, ge=0.0, le=5.0)
    review_count: int = Field(0, ge=0)

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def _stringify_ids(cls, v):
        return str(v) if v is not None else v

    @field_validator(
        "specialties",
        "denominations",
        "insurance_accepted",
        "languages",
        "service_durations",
        "content_resources_list",
        "general_relational_support",
        mode="before",
    )
    @classmethod
    def _null_list_is_empty(cls, v):
        return v or []

    @field_validator(
        "accepting_new_clients",
        "retreat_facilitated",
        "actual_therapists",
        "gloo_scholarship_available",
        "benevolence_request",
        "content_resources",
        mode="before",
    )
    @classmethod
    def _null_flag_is_false(cls, v):
        return bool(v)

    @field_validator("rating", "review_count", mode="before")
    @classmethod
    def _null_number_is_zero(cls, v):
        return v or 0


class ProviderMatch(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    provider: Provider
    match_score: int = Field(..., ge=0, alias="matchScore")
    reasons: List[str] = []
