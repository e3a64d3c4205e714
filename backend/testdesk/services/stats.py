"""Aggregate statistics over the tests a creator owns."""

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from testdesk.errors import InternalFailure
from testdesk.logging_config import get_logger, log_with_context
from testdesk.models.submission import Submission
from testdesk.models.test import Test

logger = get_logger("db")


def creator_stats(db: Session, creator_id: int) -> dict:
    """
    Count the creator's tests, the distinct students who submitted to them
    and the mean submission score (0 when nothing has been submitted).

    Raises:
        InternalFailure: the aggregate queries failed
    """
    try:
        total_tests = (
            db.query(func.count(Test.id))
            .filter(Test.created_by == creator_id)
            .scalar()
        )

        active_students, avg_score = (
            db.query(
                func.count(func.distinct(Submission.student_id)),
                func.avg(Submission.score),
            )
            .join(Test, Submission.test_id == Test.id)
            .filter(Test.created_by == creator_id)
            .one()
        )
    except SQLAlchemyError as e:
        db.rollback()
        log_with_context(logger, "ERROR", "Failed to compute creator stats",
                         context={"creator_id": creator_id}, exc_info=True)
        raise InternalFailure("Could not load statistics") from e

    return {
        "totalTests": total_tests or 0,
        "activeStudents": active_students or 0,
        "avgScore": round(float(avg_score), 2) if avg_score is not None else 0,
    }
