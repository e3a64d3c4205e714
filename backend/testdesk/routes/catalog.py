"""Question paper delivery for a single test attempt."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from testdesk.auth import get_current_user
from testdesk.database import get_db
from testdesk.security import TokenIdentity
from testdesk.services import catalog

router = APIRouter()


@router.get("/api/test/{test_id}")
def get_test(test_id: int, db: Session = Depends(get_db),
             user: TokenIdentity = Depends(get_current_user)):
    """Return the test and its questions without answers or marks."""
    return catalog.get_test_for_attempt(db, test_id)
