from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

SCORING_FIELDS = {"correctAnswer", "correct_answer", "marks", "negativeMarks", "negative_marks"}


def test_lists_only_published_tests_with_question_counts(client, student, auth_headers, make_test):
    physics = make_test("Physics Mock", questions=[("A", 4, 1), ("B", 4, 1), ("C", 4, 1)])
    make_test("Draft Paper", published=False)
    empty = make_test("Empty Paper", questions=[], total_marks=0)

    resp = client.get("/api/student/tests", headers=auth_headers(student))

    assert resp.status_code == 200
    assert resp.json() == [
        {"id": physics.id, "title": "Physics Mock", "durationMinutes": 30,
         "totalMarks": 12, "questionCount": 3},
        {"id": empty.id, "title": "Empty Paper", "durationMinutes": 30,
         "totalMarks": 0, "questionCount": 0},
    ]


def test_test_for_attempt_never_exposes_scoring_data(client, student, auth_headers, make_test):
    test = make_test(questions=[("A", 4, 1), ("D", 2, 0.5)])

    for _ in range(2):
        resp = client.get(f"/api/test/{test.id}", headers=auth_headers(student))
        assert resp.status_code == 200
        body = resp.json()
        for q in body["questions"]:
            assert set(q) == {"id", "questionType", "imageUrl", "options"}
            assert not SCORING_FIELDS & set(q)
        assert "questions" not in body["test"]


def test_questions_come_back_in_ascending_id_order(client, student, auth_headers, make_test):
    test = make_test(questions=[("A", 1, 0), ("B", 1, 0), ("C", 1, 0)])

    body = client.get(f"/api/test/{test.id}", headers=auth_headers(student)).json()

    ids = [q["id"] for q in body["questions"]]
    assert ids == sorted(ids)
    assert body["questions"][0]["options"] == ["A", "B", "C", "D"]
    assert body["test"] == {"id": test.id, "title": "Physics Mock",
                            "durationMinutes": 30, "totalMarks": 3}


def test_missing_test_is_404(client, student, auth_headers):
    resp = client.get("/api/test/999", headers=auth_headers(student))

    assert resp.status_code == 404
    assert resp.json() == {"error": "Test not found"}


def test_test_detail_requires_token(client, make_test):
    test = make_test()

    assert client.get(f"/api/test/{test.id}").status_code == 401


def failing_query(self, *entities, **kwargs):
    raise OperationalError("SELECT FROM tests", {}, Exception("connection refused to 10.0.0.5"))


def test_catalog_read_failure_is_generic_500(client, student, auth_headers, make_test, monkeypatch):
    test = make_test()
    headers = auth_headers(student)

    monkeypatch.setattr(Session, "query", failing_query)
    listing = client.get("/api/student/tests", headers=headers)
    detail = client.get(f"/api/test/{test.id}", headers=headers)
    monkeypatch.undo()

    assert listing.status_code == 500
    assert listing.json() == {"error": "Could not load tests"}
    assert listing.headers["X-Request-ID"]
    assert detail.status_code == 500
    assert detail.json() == {"error": "Could not load test"}
