"""
Submission Engine - scores a student's responses and stores the attempt.

Scoring rules, applied per response in input order:
1. Question id not part of the test  -> skipped, neither scored nor stored
2. No option selected (None or "")   -> unattempted, 0 marks, incorrect
3. Selected option == correct answer -> +marks, correct
4. Any other selection               -> -negative_marks, incorrect

The submission row and all of its response rows are written in a single
transaction, so a failure never leaves a submission with missing responses.
"""

import time
from typing import Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from testdesk.errors import Forbidden, InternalFailure, NotFound
from testdesk.logging_config import get_logger, log_with_context
from testdesk.models.question import Question
from testdesk.models.response_record import ResponseRecord
from testdesk.models.submission import Submission
from testdesk.models.test import Test
from testdesk.schemas import ResponseIn
from testdesk.security import TokenIdentity

logger = get_logger("scoring")


def score_responses(answer_key: dict, responses: Iterable[ResponseIn]) -> dict:
    """
    Score responses against an answer key without touching the database.

    Args:
        answer_key: question_id -> Question (correct_answer, marks, negative_marks)
        responses: Submitted answers in the order the client sent them

    Returns:
        Dict with the final score, per-response outcomes for persistence and
        counts of correct, wrong, unattempted and skipped (unknown) responses.
    """
    score = 0.0
    processed = []
    correct = wrong = unattempted = skipped = 0

    for response in responses:
        question = answer_key.get(response.question_id)
        if question is None:
            skipped += 1
            continue

        selected = response.selected_option
        if not selected:
            is_correct = False
            unattempted += 1
        elif selected == question.correct_answer:
            is_correct = True
            score += question.marks
            correct += 1
        else:
            is_correct = False
            score -= question.negative_marks
            wrong += 1

        processed.append({
            "question_id": response.question_id,
            "selected_option": selected,
            "is_correct": is_correct,
            "time_spent": response.time_spent or 0,
        })

    return {
        "score": score,
        "responses": processed,
        "counts": {
            "correct": correct,
            "wrong": wrong,
            "unattempted": unattempted,
            "skipped": skipped,
        },
    }


def submit_attempt(db: Session, test_id: int, student_id: int,
                   responses: Iterable[ResponseIn], time_taken: int = None) -> Submission:
    """
    Score and persist one attempt.

    Raises:
        NotFound: the test does not exist
        InternalFailure: the submission could not be written (nothing is kept)
    """
    start_time = time.time()

    test = db.query(Test).filter(Test.id == test_id).first()
    if not test:
        raise NotFound("Test not found")

    questions = db.query(Question).filter(Question.test_id == test_id).all()
    answer_key = {q.id: q for q in questions}

    result = score_responses(answer_key, responses)

    submission = Submission(
        test_id=test_id,
        student_id=student_id,
        score=result["score"],
        time_taken_seconds=time_taken,
    )
    submission.responses = [
        ResponseRecord(
            question_id=r["question_id"],
            selected_option=r["selected_option"],
            is_correct=r["is_correct"],
            time_spent_seconds=r["time_spent"],
        )
        for r in result["responses"]
    ]
    db.add(submission)

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        log_with_context(logger, "ERROR", "Failed to save submission",
            context={"test_id": test_id, "student_id": student_id},
            extra_data={"responses": len(result["responses"])},
            exc_info=True)
        raise InternalFailure("Could not save submission") from e

    duration_ms = (time.time() - start_time) * 1000
    counts = result["counts"]
    log_with_context(logger, "INFO",
        "Submission scored: {} (correct={}, wrong={}, unattempted={}, skipped={})".format(
            result["score"], counts["correct"], counts["wrong"],
            counts["unattempted"], counts["skipped"]),
        context={
            "submission_id": submission.id,
            "test_id": test_id,
            "student_id": student_id,
        },
        extra_data={
            "duration_ms": round(duration_ms, 2),
            "score": float(result["score"]),
        })

    return submission


def get_result(db: Session, submission_id: int, caller: TokenIdentity) -> dict:
    """
    Read back a stored submission with its test title and response breakdown.

    Students may only read their own submissions; creators may read any.

    Raises:
        NotFound: no submission with this id
        Forbidden: the caller neither owns the submission nor is a creator
    """
    submission = db.query(Submission).options(
        joinedload(Submission.test),
        selectinload(Submission.responses),
    ).filter(Submission.id == submission_id).first()

    if not submission:
        raise NotFound("Result not found")

    if submission.student_id != caller.id and caller.role != "creator":
        log_with_context(logger, "WARNING", "Denied access to another student's result",
                         context={"submission_id": submission_id})
        raise Forbidden("You can only view your own results")

    return {
        "id": submission.id,
        "testId": submission.test_id,
        "studentId": submission.student_id,
        "score": float(submission.score),
        "timeTaken": submission.time_taken_seconds,
        "submittedAt": submission.submitted_at.isoformat() if submission.submitted_at else None,
        "title": submission.test.title,
        "totalMarks": submission.test.total_marks,
        "responses": [
            {
                "questionId": r.question_id,
                "selectedOption": r.selected_option,
                "isCorrect": r.is_correct,
                "timeSpent": r.time_spent_seconds,
            }
            for r in submission.responses
        ],
    }
