from fastapi.testclient import TestClient

from testdesk import models
from testdesk.main import app
from testdesk.security import verify_token
from testdesk.services import catalog

from conftest import PASSWORD


def test_register_creates_user_with_hashed_password(client, db_session):
    resp = client.post("/api/auth/register", json={
        "email": "  New.User@School.edu ", "password": "pw-123456", "role": "student"
    })

    assert resp.status_code == 200
    body = resp.json()
    assert body["email"] == "new.user@school.edu"

    user = db_session.query(models.User).filter(models.User.id == body["id"]).one()
    assert user.password_hash != "pw-123456"
    assert user.role == "student"


def test_register_duplicate_email_is_rejected(client, student):
    resp = client.post("/api/auth/register", json={
        "email": student.email, "password": "another", "role": "student"
    })

    assert resp.status_code == 400
    assert resp.json() == {"error": "Email already registered"}


def test_register_unknown_role_is_rejected(client, db_session):
    resp = client.post("/api/auth/register", json={
        "email": "admin@school.edu", "password": "pw", "role": "admin"
    })

    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid request"
    assert db_session.query(models.User).count() == 0


def test_login_returns_token_role_and_display_name(client, creator):
    resp = client.post("/api/auth/login", json={"email": creator.email, "password": PASSWORD})

    assert resp.status_code == 200
    body = resp.json()
    assert body["role"] == "creator"
    assert body["name"] == "creator"
    identity = verify_token(body["token"])
    assert identity.id == creator.id


def test_login_wrong_password_issues_nothing_and_writes_nothing(client, db_session, student):
    before = db_session.query(models.User.id, models.User.password_hash).all()

    resp = client.post("/api/auth/login", json={"email": student.email, "password": "wrong"})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid password"}
    assert "token" not in resp.json()
    db_session.expire_all()
    assert db_session.query(models.User.id, models.User.password_hash).all() == before


def test_login_unknown_user(client):
    resp = client.post("/api/auth/login", json={"email": "ghost@school.edu", "password": "x"})

    assert resp.status_code == 400
    assert resp.json() == {"error": "User not found"}


def test_student_route_without_header_is_401_and_handler_never_runs(client, monkeypatch):
    calls = []
    monkeypatch.setattr(catalog, "list_published_tests", lambda db: calls.append(db) or [])

    resp = client.get("/api/student/tests")

    assert resp.status_code == 401
    assert calls == []


def test_submit_without_header_is_401(client):
    resp = client.post("/api/student/submit", json={"testId": 1, "responses": []})

    assert resp.status_code == 401


def test_invalid_token_is_403(client):
    resp = client.get("/api/student/tests", headers={"Authorization": "Bearer forged.token.value"})

    assert resp.status_code == 403
    assert resp.json() == {"error": "Invalid or expired token"}


def test_responses_carry_request_id(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.headers["X-Request-ID"]


def test_unexpected_error_is_generic_500_with_request_id(student, auth_headers, monkeypatch):
    headers = auth_headers(student)

    def explode(db):
        raise RuntimeError("boom at /srv/testdesk/secret.py")

    monkeypatch.setattr(catalog, "list_published_tests", explode)
    with TestClient(app, raise_server_exceptions=False) as failing_client:
        resp = failing_client.get("/api/student/tests", headers=headers)

    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}
    assert resp.headers["X-Request-ID"]
