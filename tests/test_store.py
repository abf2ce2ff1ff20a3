# 📦 /tests/test_store.py

import pytest

from engine.care_plan import build_care_plan
from schemas.assessment import normalize_assessment
from services.care_plan_store import CarePlanStore
from tests.utils.dummies import FakeSupabase, intake_assessment, screening_assessment
from utils.supabase_utils import InvalidRecordError, StoreError, insert_with_retry


def make_store(db=None):
    return CarePlanStore(db or FakeSupabase(), insert_retries=3, retry_delay=0)


def create_plan(store, user_id="user-1", raw=None):
    assessment = normalize_assessment(raw or intake_assessment(stressLevel="moderate", primaryConcerns=["Burnout"]))
    recommendations, priority = build_care_plan(assessment)
    return store.create_care_plan(user_id, assessment, recommendations, priority)


def active_rows(db, user_id="user-1"):
    return [r for r in db.tables["care_plans"] if r["user_id"] == user_id and r["status"] == "active"]


def test_create_care_plan_persists_camel_case_blobs():
    db = FakeSupabase()
    plan = create_plan(make_store(db))

    assert plan.status == "active"
    assert plan.priority_level == "medium"
    row = db.tables["care_plans"][0]
    assert row["assessment_data"]["form"] == "intake"
    assert row["assessment_data"]["stressCategory"] == "moderate"
    assert "shortTerm" in row["recommendations"]
    assert plan.assessment_data.concerns == ["Burnout"]


def test_new_plan_archives_the_previous_active_plan():
    db = FakeSupabase()
    store = make_store(db)
    first = create_plan(store)
    second = create_plan(store, raw=intake_assessment(stressLevel="crisis"))

    assert [r["id"] for r in active_rows(db)] == [second.id]
    statuses = {r["id"]: r["status"] for r in db.tables["care_plans"]}
    assert statuses[first.id] == "archived"
    assert store.get_active_care_plan("user-1").id == second.id


def test_plans_of_other_users_are_untouched():
    db = FakeSupabase()
    store = make_store(db)
    other = create_plan(store, user_id="user-2")
    create_plan(store, user_id="user-1")
    assert store.get_active_care_plan("user-2").id == other.id


def test_failed_insert_restores_previous_active_plan():
    db = FakeSupabase()
    store = make_store(db)
    first = create_plan(store)

    db.failing_inserts = 3
    with pytest.raises(StoreError):
        create_plan(store)

    assert [r["id"] for r in active_rows(db)] == [first.id]


def test_insert_retries_before_succeeding():
    db = FakeSupabase(failing_inserts=2)
    plan = create_plan(make_store(db))
    assert plan.status == "active"
    assert len(db.tables["care_plans"]) == 1


def test_lost_insert_response_does_not_duplicate_the_active_plan():
    db = FakeSupabase()
    store = make_store(db)
    first = create_plan(store)

    db.lost_insert_responses = 1
    second = create_plan(store)

    assert [r["id"] for r in active_rows(db)] == [second.id]
    assert len(db.tables["care_plans"]) == 2
    statuses = {r["id"]: r["status"] for r in db.tables["care_plans"]}
    assert statuses[first.id] == "archived"


def test_lost_response_on_last_attempt_still_returns_the_stored_row():
    db = FakeSupabase(failing_inserts=2, lost_insert_responses=1)
    plan = create_plan(make_store(db))
    assert [r["id"] for r in active_rows(db)] == [plan.id]


def test_insert_with_retry_returns_row_written_by_earlier_attempt():
    db = FakeSupabase(lost_insert_responses=1)
    response = insert_with_retry(db.table("care_plans"), {"id": "plan-1", "user_id": "u"}, retries=3, delay=0)
    assert response.data[0]["id"] == "plan-1"
    assert [r["id"] for r in db.tables["care_plans"]] == ["plan-1"]


def test_insert_with_retry_raises_after_last_attempt():
    db = FakeSupabase(failing_inserts=5)
    with pytest.raises(StoreError):
        insert_with_retry(db.table("care_plans"), {"user_id": "u"}, retries=2, delay=0)
    assert db.failing_inserts == 3


def test_get_active_care_plan_none_without_plans():
    assert make_store().get_active_care_plan("nobody") is None


def test_list_care_plans_newest_first():
    store = make_store()
    first = create_plan(store)
    second = create_plan(store)
    assert [p.id for p in store.list_care_plans("user-1")] == [second.id, first.id]


def test_legacy_rows_are_normalized_on_read():
    db = FakeSupabase(tables={"care_plans": [{
        "id": "legacy",
        "user_id": "user-1",
        "assessment_data": screening_assessment(stressLevel=8, concerns=["Burnout"], insuranceType="Cigna"),
        "recommendations": {"immediate": [{"title": "Rest", "description": "Take time off", "priority": "urgent", "estimatedCost": 0}]},
        "priority_level": "urgent",
        "status": "active",
        "created_at": "2024-06-01T10:00:00+00:00",
        "updated_at": "2024-06-01T10:00:00+00:00",
    }]})
    plan = make_store(db).get_active_care_plan("user-1")
    assert plan.assessment_data.form == "screening"
    assert plan.assessment_data.stress_score == 8
    assert plan.recommendations.immediate[0].estimated_cost == 0


def test_unreadable_care_plan_raises_invalid_record():
    db = FakeSupabase(tables={"care_plans": [{
        "id": "bad",
        "user_id": "user-1",
        "assessment_data": {"stressLevel": "panic"},
        "recommendations": {},
        "priority_level": "low",
        "status": "active",
        "created_at": "2024-06-01T10:00:00+00:00",
    }]})
    with pytest.raises(InvalidRecordError):
        make_store(db).get_active_care_plan("user-1")


def test_list_providers_filters_orders_and_skips_invalid_rows():
    db = FakeSupabase(tables={"providers": [
        {"id": "low", "name": "Low", "rating": 3.1, "accepting_new_clients": True},
        {"id": "closed", "name": "Closed", "rating": 4.9, "accepting_new_clients": False},
        {"id": "high", "name": "High", "rating": 4.8, "accepting_new_clients": True, "specialties": None},
        {"id": "broken", "name": "Broken", "rating": 9.0, "accepting_new_clients": True},
    ]})
    store = make_store(db)

    providers = store.list_providers()
    assert [p.id for p in providers] == ["high", "low"]
    assert providers[0].specialties == []

    assert [p.id for p in store.list_providers(accepting_only=False)] == ["closed", "high", "low"]


def test_select_failure_raises_store_error():
    db = FakeSupabase(failing_selects=1)
    with pytest.raises(StoreError):
        make_store(db).list_providers()
