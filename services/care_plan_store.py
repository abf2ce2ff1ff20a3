# 📦 /services/care_plan_store.py
# ─────────────────────────────
# Supabase-backed storage for care plans and the provider directory
"""
All table access goes through :class:`CarePlanStore`; rows are validated into
domain records on the way out and serialized with their camelCase JSON keys on
the way in.

A user has at most one ``active`` care plan. :meth:`CarePlanStore.create_care_plan`
keeps that true by archiving the current active plan(s) before inserting the
new one, and restoring them if the insert fails.
"""

import uuid
from typing import List, Optional

import structlog
from pydantic import ValidationError

from schemas.assessment import AssessmentData
from schemas.care_plan import CarePlan, PriorityLevel, Recommendations
from schemas.provider import Provider
from utils.supabase_utils import InvalidRecordError, StoreError, insert_with_retry

log = structlog.get_logger()

CARE_PLANS_TABLE = "care_plans"
PROVIDERS_TABLE = "providers"


class CarePlanStore:
    def __init__(self, client, insert_retries: int = 3, retry_delay: float = 1.0):
        self.client = client
        self.insert_retries = insert_retries
        self.retry_delay = retry_delay

    # ─────────────────────────────
    # Care plans

    def list_care_plans(self, user_id: str) -> List[CarePlan]:
        """All plans of a user, newest first."""
        rows = self._select(
            self.client.table(CARE_PLANS_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
        )
        return [self._to_care_plan(row) for row in rows]

    def get_active_care_plan(self, user_id: str) -> Optional[CarePlan]:
        rows = self._active_rows(user_id)
        if not rows:
            return None
        return self._to_care_plan(rows[0])

    def create_care_plan(
        self,
        user_id: str,
        assessment: AssessmentData,
        recommendations: Recommendations,
        priority_level: PriorityLevel,
    ) -> CarePlan:
        """Archive the user's active plan(s), then insert the new active plan."""
        previous_ids = [row["id"] for row in self._active_rows(user_id)]
        if previous_ids:
            self._set_status(previous_ids, "archived")
            log.info("Archived previous care plans", user_id=user_id, care_plan_ids=previous_ids)

        # Client-side id: a retried insert can find the row an earlier attempt stored
        row = {
            "id": str(uuid.uuid4()),
            "user_id": user_id,
            "assessment_data": assessment.model_dump(by_alias=True, mode="json"),
            "recommendations": recommendations.to_record(),
            "priority_level": priority_level,
            "status": "active",
        }
        try:
            response = insert_with_retry(
                self.client.table(CARE_PLANS_TABLE), row,
                retries=self.insert_retries, delay=self.retry_delay,
            )
        except StoreError:
            if previous_ids:
                self._set_status(previous_ids, "active")
                log.warning("Restored previous care plans after failed insert", user_id=user_id)
            log.error("Care plan insert failed", user_id=user_id)
            raise

        plan = self._to_care_plan(response.data[0])
        log.info("Care plan created", user_id=user_id, care_plan_id=plan.id, priority=priority_level)
        return plan

    # ─────────────────────────────
    # Providers

    def list_providers(self, accepting_only: bool = True) -> List[Provider]:
        """Directory providers ordered by rating (highest first)."""
        query = self.client.table(PROVIDERS_TABLE).select("*")
        if accepting_only:
            query = query.eq("accepting_new_clients", True)
        rows = self._select(query.order("rating", desc=True))

        providers = []
        for row in rows:
            try:
                providers.append(Provider.model_validate(row))
            except ValidationError as e:
                log.warning("Skipping invalid provider row", provider_id=row.get("id"), error=str(e))
        return providers

    # ─────────────────────────────
    # Internal

    def _active_rows(self, user_id: str) -> List[dict]:
        return self._select(
            self.client.table(CARE_PLANS_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .eq("status", "active")
            .order("created_at", desc=True)
        )

    def _set_status(self, care_plan_ids: List[str], status: str) -> None:
        try:
            self.client.table(CARE_PLANS_TABLE).update({"status": status}).in_("id", care_plan_ids).execute()
        except Exception as e:
            raise StoreError(f"Failed to set care plan status to {status}") from e

    def _select(self, query) -> List[dict]:
        try:
            response = query.execute()
        except Exception as e:
            raise StoreError("Supabase select failed") from e
        return response.data or []

    def _to_care_plan(self, row: dict) -> CarePlan:
        try:
            return CarePlan.model_validate(row)
        except ValidationError as e:
            raise InvalidRecordError(f"Care plan {row.get('id')} failed validation: {e}") from e
