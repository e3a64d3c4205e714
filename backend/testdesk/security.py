"""
Token issuing/verification and password hashing.

Tokens are stateless HS256 JWTs carrying the user's id and role. There is no
refresh flow and no revocation list; a token is valid until it expires.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import BaseModel, ValidationError
from werkzeug.security import generate_password_hash, check_password_hash

from testdesk import config
from testdesk.errors import Unauthenticated, InvalidToken


class TokenIdentity(BaseModel):
    """Identity recovered from a verified bearer token."""
    id: int
    role: str


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    """Constant-time comparison of `password` against a stored salted hash."""
    return check_password_hash(password_hash, password)


def issue_token(user_id: int, role: str, expires_minutes: int = None) -> str:
    """
    Sign a bearer token for `user_id`.

    Args:
        user_id: Primary key of the authenticated user
        role: student | creator
        expires_minutes: Lifetime override, defaults to TOKEN_EXPIRE_MINUTES
    """
    lifetime = config.TOKEN_EXPIRE_MINUTES if expires_minutes is None else expires_minutes
    now = datetime.now(timezone.utc)
    payload = {
        "id": user_id,
        "role": role,
        "iat": now,
        "exp": now + timedelta(minutes=lifetime),
    }
    return jwt.encode(payload, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


def verify_token(token: Optional[str]) -> TokenIdentity:
    """
    Verify a bearer token and return the identity it carries.

    Raises:
        Unauthenticated: no token was supplied
        InvalidToken: bad signature, malformed, expired or missing claims
    """
    if not token:
        raise Unauthenticated()
    try:
        payload = jwt.decode(
            token,
            config.JWT_SECRET,
            algorithms=[config.JWT_ALGORITHM],
            options={"require": ["exp", "id", "role"]},
        )
    except jwt.PyJWTError as e:
        raise InvalidToken() from e
    try:
        return TokenIdentity(id=payload["id"], role=payload["role"])
    except ValidationError as e:
        raise InvalidToken() from e
