# 📦 engine/matcher.py
# ─────────────────────────────
# Provider matching engine: additive rule scores, ranked top-N

from typing import List, Optional, Sequence

import structlog

from config import load_match_rules
from engine.rules import RULES
from schemas.assessment import AssessmentData
from schemas.care_plan import CarePlan
from schemas.provider import Provider, ProviderMatch

MATCH_RULES = load_match_rules()

log = structlog.get_logger()


class ProviderMatcher:
    def __init__(self, assessment: AssessmentData, providers: Sequence[Provider], rules: Optional[dict] = None):
        self.assessment = assessment
        self.providers = providers
        self.rules = rules or MATCH_RULES
        self.excluded = 0

    def run(self, top_n: Optional[int] = None) -> List[ProviderMatch]:
        """Score every provider, drop zero scores, sort descending, keep top_n.

        ``top_n`` may lower the configured limit but never raise it.
        """
        limit = self.rules.get("top_n", 10)
        if top_n is None:
            top_n = limit
        if top_n < 1:
            raise ValueError(f"top_n must be at least 1, got {top_n}")
        top_n = min(top_n, limit)

        matches = []
        self.excluded = 0
        for provider in self.providers:
            match = self.score(provider)
            if match.match_score > 0:
                matches.append(match)
            else:
                self.excluded += 1

        # sorted() is stable: equal scores keep the directory order
        ranked = sorted(matches, key=lambda m: m.match_score, reverse=True)[:top_n]

        log.info(
            "Provider matches ranked",
            form=self.assessment.form,
            candidates=len(self.providers),
            excluded=self.excluded,
            returned=len(ranked),
        )
        return ranked

    def score(self, provider: Provider) -> ProviderMatch:
        points = self.rules["points"]
        thresholds = self.rules["thresholds"]
        total = 0
        reasons = []
        for rule in RULES:
            result = rule(self.assessment, provider, points, thresholds)
            if result is None:
                continue
            gained, reason = result
            total += gained
            reasons.append(reason)
        return ProviderMatch(provider=provider, match_score=total, reasons=reasons)


def recommend_providers(care_plan: CarePlan, providers: Sequence[Provider], top_n: Optional[int] = None) -> List[ProviderMatch]:
    """Ranked provider matches for a stored care plan's assessment."""
    return ProviderMatcher(care_plan.assessment_data, providers).run(top_n=top_n)
