"""
Account service - registration and login against the users table.

Emails are trimmed and lower-cased before storage and lookup, so the exact
match performed at login is insensitive to casing typed by the user.
"""

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from testdesk.errors import DuplicateEmail, InternalFailure, InvalidPassword, UserNotFound
from testdesk.logging_config import get_logger, log_with_context
from testdesk.models.user import User
from testdesk.security import hash_password, issue_token, verify_password

logger = get_logger("auth")
db_logger = get_logger("db")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def login(db: Session, email: str, password: str) -> dict:
    """
    Authenticate a user and issue a bearer token.

    Returns:
        {"token", "role", "name"} where name is the email's local part

    Raises:
        UserNotFound: no user with this email
        InvalidPassword: the password does not match the stored hash
    """
    email = normalize_email(email)
    user = db.query(User).filter(User.email == email).first()

    if not user:
        log_with_context(logger, "INFO", "Login failed: unknown email",
                         extra_data={"email": email})
        raise UserNotFound()

    if not verify_password(user.password_hash, password):
        log_with_context(logger, "INFO", "Login failed: wrong password",
                         context={"login_user_id": user.id})
        raise InvalidPassword()

    token = issue_token(user.id, user.role)
    log_with_context(logger, "INFO", "User logged in",
                     context={"login_user_id": user.id}, extra_data={"role": user.role})
    return {"token": token, "role": user.role, "name": user.display_name}


def register(db: Session, email: str, password: str, role: str) -> User:
    """
    Create a user with a hashed password.

    Raises:
        DuplicateEmail: the email is already registered
        InternalFailure: any other database error
    """
    email = normalize_email(email)
    user = User(email=email, password_hash=hash_password(password), role=role)
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        log_with_context(db_logger, "INFO", "Registration rejected: duplicate email",
                         extra_data={"email": email, "error": str(e.orig)})
        raise DuplicateEmail() from e
    except SQLAlchemyError as e:
        db.rollback()
        log_with_context(db_logger, "ERROR", "Failed to create user",
                         extra_data={"email": email}, exc_info=True)
        raise InternalFailure() from e

    db.refresh(user)
    log_with_context(db_logger, "INFO", "Created user {}".format(email),
                     context={"new_user_id": user.id}, extra_data={"role": role})
    return user
