from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from testdesk import models


def add_submission(db_session, test, student, score):
    db_session.add(models.Submission(test_id=test.id, student_id=student.id,
                                     score=score, time_taken_seconds=60))
    db_session.commit()


def test_stats_aggregate_over_the_creators_own_tests(client, db_session, make_user, creator,
                                                     auth_headers, make_test):
    alice = make_user(email="alice@testdesk.dev")
    bob = make_user(email="bob@testdesk.dev")
    rival = make_user(email="rival@testdesk.dev", role="creator")

    physics = make_test("Physics", creator=creator)
    chemistry = make_test("Chemistry", creator=creator, published=False)
    foreign = make_test("Foreign", creator=rival)

    add_submission(db_session, physics, alice, 8)
    add_submission(db_session, physics, alice, 4)
    add_submission(db_session, chemistry, bob, 3)
    add_submission(db_session, foreign, bob, 100)

    resp = client.get("/api/creator/stats", headers=auth_headers(creator))

    assert resp.status_code == 200
    assert resp.json() == {"totalTests": 2, "activeStudents": 2, "avgScore": 5.0}


def test_stats_with_no_submissions(client, creator, auth_headers, make_test):
    make_test(creator=creator)

    resp = client.get("/api/creator/stats", headers=auth_headers(creator))

    assert resp.json() == {"totalTests": 1, "activeStudents": 0, "avgScore": 0}


def test_stats_require_creator_role(client, student, auth_headers):
    resp = client.get("/api/creator/stats", headers=auth_headers(student))

    assert resp.status_code == 403
    assert resp.json() == {"error": "This action requires the creator role"}


def test_stats_require_token(client):
    assert client.get("/api/creator/stats").status_code == 401


def test_stats_read_failure_is_generic_500(client, creator, auth_headers, monkeypatch):
    headers = auth_headers(creator)

    def failing_query(self, *entities, **kwargs):
        raise OperationalError("SELECT count(tests.id)", {}, Exception("server closed the connection"))

    monkeypatch.setattr(Session, "query", failing_query)
    resp = client.get("/api/creator/stats", headers=headers)
    monkeypatch.undo()

    assert resp.status_code == 500
    assert resp.json() == {"error": "Could not load statistics"}
    assert resp.headers["X-Request-ID"]
