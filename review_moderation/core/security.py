import logging
from typing import Callable

from fastapi import Depends, Request

from review_moderation.core.config import Settings, get_settings
from review_moderation.core.exceptions import ForbiddenError, UnauthorizedError
from review_moderation.database.enums import UserRole
from review_moderation.schemas.users import CurrentUser

logger = logging.getLogger(__name__)


def get_current_user(
    request: Request, s: Settings = Depends(get_settings)
) -> CurrentUser:
    """
    Build the caller identity from the headers set by the authenticating proxy.

    Nothing is remembered between requests; each one carries its own credentials.
    """
    user_id = (request.headers.get(s.AUTH_USER_ID_HEADER) or "").strip()
    role = (request.headers.get(s.AUTH_USER_ROLE_HEADER) or "").strip().upper()

    if not user_id:
        raise UnauthorizedError()
    try:
        return CurrentUser(id=user_id, role=UserRole(role))
    except ValueError:
        logger.warning(f"Rejected request with unknown role {role!r} for user={user_id}")
        raise UnauthorizedError("Not authorized, unknown role")


def require_role(*roles: UserRole) -> Callable[..., CurrentUser]:
    """Dependency factory restricting a route to the given roles."""

    def _check(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if user.role not in roles:
            raise ForbiddenError(f"User role {user.role.value} is not authorized to access this route")
        return user

    return _check
