"""
Authentication gate for protected routes.

`get_current_user` is a FastAPI dependency: it runs before the handler body,
so a missing or invalid token short-circuits the request with 401/403 and
the handler never executes.
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from testdesk.errors import Forbidden, TestDeskError
from testdesk.logging_config import get_logger, log_with_context, user_id_var
from testdesk.security import TokenIdentity, verify_token

logger = get_logger("auth")

# auto_error=False so a missing header raises our Unauthenticated (401)
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TokenIdentity:
    token = credentials.credentials if credentials else None
    try:
        user = verify_token(token)
    except TestDeskError as e:
        log_with_context(logger, "WARNING",
            "Rejected request to {}: {}".format(request.url.path, e),
            extra_data={"has_token": bool(token)})
        raise

    request.state.user = user
    user_id_var.set(user.id)
    return user


def require_role(role: str):
    """Build a dependency that only admits authenticated users holding `role`."""

    def checker(user: TokenIdentity = Depends(get_current_user)) -> TokenIdentity:
        if user.role != role:
            log_with_context(logger, "WARNING",
                "User {} with role '{}' denied access requiring '{}'".format(user.id, user.role, role))
            raise Forbidden("This action requires the {} role".format(role))
        return user

    return checker
