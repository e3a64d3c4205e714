"""
Student routes - published test list, submission and result lookup.

Every endpoint here requires a bearer token; the authentication dependency
rejects the request before any handler code or query runs.
"""

import time

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from testdesk.auth import get_current_user
from testdesk.database import get_db
from testdesk.logging_config import get_logger, log_with_context
from testdesk.schemas import SubmitRequest
from testdesk.security import TokenIdentity
from testdesk.services import catalog, scoring

router = APIRouter(prefix="/api/student")
logger = get_logger("http")


@router.get("/tests")
def list_tests(db: Session = Depends(get_db),
               user: TokenIdentity = Depends(get_current_user)):
    """List published tests with question counts."""
    start_time = time.time()
    tests = catalog.list_published_tests(db)

    duration_ms = (time.time() - start_time) * 1000
    log_with_context(logger, "INFO", "Listed {} published tests".format(len(tests)),
                     extra_data={"duration_ms": round(duration_ms, 2)})
    return tests


@router.post("/submit")
def submit_test(request: SubmitRequest, db: Session = Depends(get_db),
                user: TokenIdentity = Depends(get_current_user)):
    """Score the caller's responses and store the submission."""
    submission = scoring.submit_attempt(
        db, request.test_id, user.id, request.responses, request.time_taken
    )
    return {"success": True, "submissionId": submission.id}


@router.get("/result/{submission_id}")
def get_result(submission_id: int, db: Session = Depends(get_db),
               user: TokenIdentity = Depends(get_current_user)):
    """Stored score and per-question breakdown; owner or creator only."""
    return scoring.get_result(db, submission_id, user)
