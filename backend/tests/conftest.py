import os

# Configure the app for an isolated in-memory database before it is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from testdesk import models
from testdesk.database import SessionLocal, create_tables, drop_tables
from testdesk.main import app
from testdesk.security import hash_password, issue_token

PASSWORD = "s3cret-pass"


@pytest.fixture(autouse=True)
def reset_database():
    drop_tables()
    create_tables()
    yield


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(db_session):
    def _make_user(email="student@testdesk.dev", role="student", password=PASSWORD):
        user = models.User(email=email, password_hash=hash_password(password), role=role)
        db_session.add(user)
        db_session.commit()
        return user
    return _make_user


@pytest.fixture
def make_test(db_session):
    """
    Create a test with questions given as (correct_answer, marks, negative_marks).
    """
    def _make_test(title="Physics Mock", questions=(("B", 4, 1),), published=True,
                   creator=None, total_marks=None):
        test = models.Test(
            title=title,
            duration_minutes=30,
            total_marks=total_marks if total_marks is not None else sum(q[1] for q in questions),
            is_published=published,
            created_by=creator.id if creator else None,
        )
        test.questions = [
            models.Question(
                question_type="mcq",
                image_url=f"/img/{title.lower().replace(' ', '-')}-{n}.png",
                options=["A", "B", "C", "D"],
                correct_answer=answer,
                marks=marks,
                negative_marks=negative,
            )
            for n, (answer, marks, negative) in enumerate(questions, 1)
        ]
        db_session.add(test)
        db_session.commit()
        return test
    return _make_test


@pytest.fixture
def auth_headers():
    def _auth_headers(user):
        return {"Authorization": f"Bearer {issue_token(user.id, user.role)}"}
    return _auth_headers


@pytest.fixture
def student(make_user):
    return make_user()


@pytest.fixture
def creator(make_user):
    return make_user(email="creator@testdesk.dev", role="creator")
