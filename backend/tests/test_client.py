import httpx
import pytest

from testdesk.client import ApiClient, ApiError, ApiSession

from conftest import PASSWORD


@pytest.fixture
def logouts():
    return []


@pytest.fixture
def api(client, logouts):
    return ApiClient("http://testserver/api", client=client,
                     on_logout=lambda: logouts.append(True))


def test_login_stores_credentials_in_the_session(api, student):
    data = api.login(student.email, PASSWORD)

    assert data["role"] == "student"
    assert api.session.token == data["token"]
    assert api.session.role == "student"
    assert api.session.name == "student"
    assert api.get_headers()["Authorization"] == f"Bearer {data['token']}"


def test_full_attempt_through_the_client(api, student, make_test):
    test = make_test(questions=[("B", 4, 1), ("C", 2, 1)])
    api.login(student.email, PASSWORD)

    tests = api.get_tests()
    paper = api.get_test_details(test.id)
    first, second = (q["id"] for q in paper["questions"])
    submitted = api.submit_test({
        "testId": test.id,
        "responses": [
            {"questionId": first, "selectedOption": "B", "timeSpent": 40},
            {"questionId": second, "selectedOption": "A", "timeSpent": 25},
        ],
        "timeTaken": 65,
    })
    result = api.get_result(submitted["submissionId"])

    assert [t["id"] for t in tests] == [test.id]
    assert submitted["success"] is True
    assert result["score"] == 3
    assert result["timeTaken"] == 65


def test_401_clears_session_and_logs_out(api, logouts):
    api.session.token = None

    assert api.get_tests() is None
    assert logouts == [True]
    assert not api.session.is_authenticated


def test_server_error_message_is_raised(api):
    with pytest.raises(ApiError) as excinfo:
        api.login("ghost@school.edu", "whatever")

    assert excinfo.value.message == "User not found"
    assert excinfo.value.status_code == 400


def test_forbidden_keeps_session(api, student):
    api.login(student.email, PASSWORD)

    with pytest.raises(ApiError) as excinfo:
        api.get_stats()

    assert excinfo.value.status_code == 403
    assert api.session.is_authenticated


def test_register_then_login(api):
    created = api.register("fresh@school.edu", "pw-123456", "creator")
    data = api.login("fresh@school.edu", "pw-123456")

    assert created["email"] == "fresh@school.edu"
    assert data["role"] == "creator"
    assert api.get_stats() == {"totalTests": 0, "activeStudents": 0, "avgScore": 0}


def test_generic_message_when_server_gives_none():
    transport = httpx.MockTransport(lambda request: httpx.Response(502, text="Bad Gateway"))
    api = ApiClient("http://gateway/api", client=httpx.Client(transport=transport))

    with pytest.raises(ApiError) as excinfo:
        api.get_tests()

    assert excinfo.value.message == "API Request Failed"
    assert excinfo.value.status_code == 502


def test_session_can_be_shared_between_clients(client):
    session = ApiSession(token="abc", role="student", name="sam")
    api = ApiClient("http://testserver/api", session=session, client=client)

    assert api.get_headers()["Authorization"] == "Bearer abc"
    session.clear()
    assert "Authorization" not in api.get_headers()
