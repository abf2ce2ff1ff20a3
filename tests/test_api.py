# 📦 /tests/test_api.py

import inspect

import pytest
from fastapi.testclient import TestClient

from api import handlers
from api.dependencies import get_current_user, get_store
from main import app
from services.care_plan_store import CarePlanStore
from tests.utils.dummies import FakeSupabase, intake_assessment, screening_assessment

client = TestClient(app)

PROVIDER_ROWS = [
    {"id": "p-burnout", "name": "Restore Ministries", "rating": 4.9, "accepting_new_clients": True,
     "specialties": ["Burnout", "Anxiety"], "actual_therapists": True, "location_type": "both"},
    {"id": "p-plain", "name": "Plain Counseling", "rating": 3.2, "accepting_new_clients": True},
    {"id": "p-closed", "name": "Closed Practice", "rating": 5.0, "accepting_new_clients": False,
     "specialties": ["Burnout"]},
]


@pytest.fixture
def db():
    return FakeSupabase(tables={"providers": [dict(r) for r in PROVIDER_ROWS]})


@pytest.fixture
def signed_in(db):
    app.dependency_overrides[get_current_user] = lambda: "user-1"
    app.dependency_overrides[get_store] = lambda: CarePlanStore(db, retry_delay=0)
    yield db
    app.dependency_overrides.clear()


def test_healthcheck():
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_preview_care_plan():
    response = client.post("/care-plans/preview", json=intake_assessment(stressLevel="crisis", primaryConcerns=["Burnout"]))
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["priority_level"] == "urgent"
    assert [i["title"] for i in data["recommendations"]["immediate"]] == ["Immediate Support"]
    assert [i["title"] for i in data["recommendations"]["resources"]] == ["Sabbath and Rest Practices", "Support Groups"]


def test_preview_care_plan_rejects_invalid_assessment():
    response = client.post("/care-plans/preview", json=intake_assessment(stressLevel="panic"))
    assert response.status_code == 422
    body = response.json()
    assert body["status"] == "error"
    assert body["message"] == "Invalid assessment."


def test_care_plan_endpoints_require_a_session():
    assert client.get("/care-plans/active").status_code == 401
    assert client.post("/care-plans", json=intake_assessment()).status_code == 401


def test_create_and_fetch_active_care_plan(signed_in):
    created = client.post("/care-plans", json=intake_assessment(stressLevel="severe"))
    assert created.status_code == 201
    plan = created.json()["data"]
    assert plan["status"] == "active"
    assert plan["priority_level"] == "high"

    active = client.get("/care-plans/active")
    assert active.status_code == 200
    assert active.json()["data"]["id"] == plan["id"]


def test_second_plan_supersedes_first(signed_in):
    first = client.post("/care-plans", json=intake_assessment()).json()["data"]
    second = client.post("/care-plans", json=intake_assessment(stressLevel="moderate")).json()["data"]

    plans = client.get("/care-plans").json()["data"]
    assert [p["id"] for p in plans] == [second["id"], first["id"]]
    assert [p["status"] for p in plans] == ["active", "archived"]


def test_create_care_plan_store_failure(signed_in):
    signed_in.failing_inserts = 3
    response = client.post("/care-plans", json=intake_assessment())
    assert response.status_code == 500
    assert response.json()["message"] == "Failed to create care plan. Please try again."


def test_active_care_plan_404_without_plan(signed_in):
    response = client.get("/care-plans/active")
    assert response.status_code == 404
    assert response.json()["status"] == "error"


def test_recommended_providers_requires_active_plan(signed_in):
    assert client.get("/recommended-providers").status_code == 404


def test_recommended_providers_ranks_accepting_providers(signed_in):
    client.post("/care-plans", json=screening_assessment(stressLevel=8, concerns=["Burnout"], preferredFormat="virtual"))

    response = client.get("/recommended-providers")
    assert response.status_code == 200
    body = response.json()
    assert body["care_plan_id"]
    matches = body["data"]
    assert [m["provider"]["id"] for m in matches] == ["p-burnout"]
    # 20 concern + 10 virtual + 15 therapists + 10 rating
    assert matches[0]["matchScore"] == 55
    assert matches[0]["reasons"][0] == "Specializes in Burnout"


def test_recommended_providers_preview_is_stateless():
    response = client.post("/recommended-providers/preview", json={
        "assessment": {"concerns": ["Anxiety"], "faithIntegration": True, "denomination": "Baptist", "insuranceType": "Aetna"},
        "providers": [
            {"id": "a", "name": "A", "specialties": ["Anxiety"], "denominations": ["Baptist"],
             "insurance_accepted": ["Aetna"], "rating": 4.8},
            {"id": "b", "name": "B", "rating": 3.0},
        ],
    })
    assert response.status_code == 200
    matches = response.json()["data"]
    assert len(matches) == 1
    assert matches[0]["matchScore"] == 70
    assert len(matches[0]["reasons"]) == 5


def test_recommended_providers_preview_top_n():
    providers = [{"id": str(i), "name": f"P{i}", "rating": 4.7} for i in range(5)]
    response = client.post("/recommended-providers/preview?top_n=2", json={"assessment": {}, "providers": providers})
    assert [m["provider"]["id"] for m in response.json()["data"]] == ["0", "1"]


@pytest.mark.parametrize("top_n", [50, 0, -1])
def test_recommended_providers_preview_rejects_out_of_range_top_n(top_n):
    providers = [{"id": str(i), "name": f"P{i}", "rating": 4.7} for i in range(15)]
    response = client.post(f"/recommended-providers/preview?top_n={top_n}", json={"assessment": {}, "providers": providers})
    assert response.status_code == 422
    assert response.json()["status"] == "error"


def test_recommended_providers_preview_never_returns_more_than_ten():
    providers = [{"id": str(i), "name": f"P{i}", "rating": 4.7} for i in range(15)]
    response = client.post("/recommended-providers/preview", json={"assessment": {}, "providers": providers})
    assert len(response.json()["data"]) == 10


def test_recommended_providers_rejects_out_of_range_top_n(signed_in):
    client.post("/care-plans", json=screening_assessment(stressLevel=8, concerns=["Burnout"]))
    assert client.get("/recommended-providers?top_n=11").status_code == 422


def test_missing_session_uses_error_envelope():
    response = client.get("/care-plans")
    assert response.status_code == 401
    assert response.json() == {"status": "error", "message": "Missing bearer token.", "info": None}


def test_malformed_request_body_uses_error_envelope():
    response = client.post("/recommended-providers/preview", json={"assessment": {}, "providers": "none"})
    assert response.status_code == 422
    body = response.json()
    assert body["status"] == "error"
    assert body["message"] == "Invalid request."
    assert body["info"][0]["loc"] == ["body", "providers"]


def test_store_handlers_run_in_the_threadpool():
    # Sync handlers are dispatched to a worker thread, keeping the event loop free
    assert not inspect.iscoroutinefunction(handlers.create_care_plan)
    assert not inspect.iscoroutinefunction(handlers.list_care_plans)
    assert not inspect.iscoroutinefunction(handlers.get_active_care_plan)
