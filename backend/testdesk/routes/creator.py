"""Creator routes - dashboard statistics."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from testdesk.auth import require_role
from testdesk.database import get_db
from testdesk.security import TokenIdentity
from testdesk.services.stats import creator_stats

router = APIRouter(prefix="/api/creator")


@router.get("/stats")
def get_stats(db: Session = Depends(get_db),
              user: TokenIdentity = Depends(require_role("creator"))):
    """Totals across the tests owned by the calling creator."""
    return creator_stats(db, user.id)
