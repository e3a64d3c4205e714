"""
Authentication routes - login and registration.

Both endpoints are public. Failures are reported as 400 with an `error`
message; a failed login never writes to the users table.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from testdesk.database import get_db
from testdesk.schemas import LoginRequest, RegisterRequest
from testdesk.services import accounts

router = APIRouter(prefix="/api/auth")


@router.post("/login")
def login(request: LoginRequest, db: Session = Depends(get_db)):
    """Exchange email and password for a bearer token."""
    return accounts.login(db, request.email, request.password)


@router.post("/register")
def register(request: RegisterRequest, db: Session = Depends(get_db)):
    """Create a student or creator account and return its id and email."""
    user = accounts.register(db, request.email, request.password, request.role)
    return {"id": user.id, "email": user.email}
