# engine/__init__.py
# ─────────────────────────────
# Init file for the care plan / provider matching engine
# Exposes core components

from .care_plan import build_care_plan, determine_priority_level, generate_recommendations
from .matcher import ProviderMatcher, recommend_providers

__all__ = [
    "build_care_plan",
    "determine_priority_level",
    "generate_recommendations",
    "ProviderMatcher",
    "recommend_providers",
]
