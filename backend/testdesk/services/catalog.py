"""
Test catalog queries: the student's list of published tests and the
question paper for an attempt.

Serialisers here are the only place tests and questions are turned into
JSON for students, which keeps answer keys and marks out of every response.
"""

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from testdesk.errors import InternalFailure, NotFound
from testdesk.logging_config import get_logger, log_with_context
from testdesk.models.question import Question
from testdesk.models.test import Test

logger = get_logger("db")


def serialize_test(test: Test) -> dict:
    return {
        "id": test.id,
        "title": test.title,
        "durationMinutes": test.duration_minutes,
        "totalMarks": test.total_marks,
    }


def serialize_question(question: Question) -> dict:
    """Student-facing view of a question: no correct answer, marks or negative marks."""
    return {
        "id": question.id,
        "questionType": question.question_type,
        "imageUrl": question.image_url,
        "options": question.options or [],
    }


def list_published_tests(db: Session) -> list:
    """
    Published tests with their question counts, ordered by id.

    Raises:
        InternalFailure: the catalog query failed
    """
    question_count = (
        select(func.count(Question.id))
        .where(Question.test_id == Test.id)
        .correlate(Test)
        .scalar_subquery()
    )
    try:
        rows = (
            db.query(Test, question_count.label("question_count"))
            .filter(Test.is_published.is_(True))
            .order_by(Test.id)
            .all()
        )
    except SQLAlchemyError as e:
        db.rollback()
        log_with_context(logger, "ERROR", "Failed to list published tests", exc_info=True)
        raise InternalFailure("Could not load tests") from e

    return [
        {**serialize_test(test), "questionCount": count}
        for test, count in rows
    ]


def get_test_for_attempt(db: Session, test_id: int) -> dict:
    """
    Load a test and its questions in ascending id order.

    Raises:
        NotFound: no test with this id
        InternalFailure: the test or its questions could not be read
    """
    try:
        test = db.query(Test).filter(Test.id == test_id).first()
        questions = (
            db.query(Question)
            .filter(Question.test_id == test_id)
            .order_by(Question.id.asc())
            .all()
        ) if test else []
    except SQLAlchemyError as e:
        db.rollback()
        log_with_context(logger, "ERROR", "Failed to load test for attempt",
                         context={"test_id": test_id}, exc_info=True)
        raise InternalFailure("Could not load test") from e

    if not test:
        raise NotFound("Test not found")

    return {
        "test": serialize_test(test),
        "questions": [serialize_question(q) for q in questions],
    }
