"""
Tests for the matching HTTP endpoint.
"""

import uuid

from sqlalchemy.exc import OperationalError

from matching.logic import MatchingEngine
from matching.models import Plan, University
from models.models_user import User
from utils.auth_utils import create_token


def _seed_catalog(db, count=5):
    db.add_all([
        University(
            name=f"University {i:02d}",
            country="USA" if i % 2 == 0 else "Canada",
            avg_tuition_per_year=10000.0 + i * 1000,
            attributes={"focus_areas": ["Engineering"]},
        )
        for i in range(count)
    ])
    db.commit()


def test_health(client):
    assert client.get("/matching/health").json()["status"] == "ok"
    assert client.get("/health").json() == {"status": "ok"}


def test_anonymous_request_is_truncated(client, db):
    _seed_catalog(db, count=8)

    response = client.post("/matching", json={})

    assert response.status_code == 200
    body = response.json()
    assert body["totalCount"] == 8
    assert len(body["matches"]) == 3
    assert all(m["matchPercentage"] == 100 for m in body["matches"])
    assert [m["name"] for m in body["matches"]] == ["University 00", "University 01", "University 02"]


def test_authenticated_free_user_sees_everything(client, db):
    _seed_catalog(db, count=8)
    user = User(id=uuid.uuid4(), email="student@example.com")
    db.add(user)
    db.commit()

    response = client.post(
        "/matching",
        json={"country": "USA", "minMatchPercentage": 100},
        headers={"Authorization": f"Bearer {create_token(str(user.id))}"},
    )

    body = response.json()
    assert body["totalCount"] == 4
    assert len(body["matches"]) == 4
    assert all(m["country"] == "USA" for m in body["matches"])


def test_paid_plan_user(client, db):
    _seed_catalog(db, count=6)
    plan = Plan(key="pro", name="Pro")
    db.add(plan)
    db.commit()
    user = User(id=uuid.uuid4(), email="pro@example.com", plan_id=plan.id)
    db.add(user)
    db.commit()

    response = client.post(
        "/matching",
        json={"interests": ["engineering"]},
        headers={"Authorization": f"Bearer {create_token(str(user.id))}"},
    )

    body = response.json()
    assert body["totalCount"] == 6
    assert len(body["matches"]) == 6


def test_invalid_token_falls_back_to_anonymous(client, db):
    _seed_catalog(db, count=5)

    response = client.post("/matching", json={}, headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 200
    assert len(response.json()["matches"]) == 3


def test_malformed_criteria_are_ignored(client, db):
    _seed_catalog(db, count=2)

    response = client.post("/matching", json={"maxTuition": "cheap", "academics": {"enabled": "yes"}})

    assert response.status_code == 200
    assert response.json()["totalCount"] == 2


def test_empty_catalog(client):
    response = client.post("/matching", json={"country": "USA"})

    assert response.status_code == 200
    assert response.json() == {"matches": [], "totalCount": 0}


def test_collaborator_failure_returns_500(client, monkeypatch):
    def _fail(db):
        raise RuntimeError("catalog unavailable")

    monkeypatch.setattr("matching.logic.runner.fetch_university_catalog", _fail)

    response = client.post("/matching", json={})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to get matching universities."}


def test_health_reports_engine_version(client):
    assert client.get("/matching/health").json()["version"] == MatchingEngine().version


def test_oversized_criteria_number_is_ignored(client, db):
    _seed_catalog(db, count=2)

    response = client.post(
        "/matching",
        content='{"maxTuition": 1' + "0" * 400 + "}",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 200
    assert response.json()["totalCount"] == 2


def test_failed_user_lookup_falls_back_to_anonymous(client, db, monkeypatch):
    _seed_catalog(db, count=5)
    user = User(id=uuid.uuid4(), email="lookup@example.com")
    db.add(user)
    db.commit()

    def _fail(db, user_id):
        raise OperationalError("SELECT users", {}, Exception("connection lost"))

    monkeypatch.setattr("matching.routes.get_user_by_id", _fail)

    response = client.post(
        "/matching",
        json={},
        headers={"Authorization": f"Bearer {create_token(str(user.id))}"},
    )

    assert response.status_code == 200
    assert response.json()["totalCount"] == 5
    assert len(response.json()["matches"]) == 3
