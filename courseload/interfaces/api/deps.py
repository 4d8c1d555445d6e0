"""FastAPI dependency — JWT auth middleware and role guards."""

from typing import Optional

import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from courseload.application.services.token_service import TokenService
from courseload.core.exceptions import ForbiddenException, InvalidTokenException, UnauthorizedException
from courseload.domain.actor import Actor
from courseload.domain.enums import Role
from courseload.domain.repositories.user_repository import UserRepository
from courseload.interfaces.deps import get_token_service, get_user_repository

logger = structlog.get_logger(__name__)

security = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    users: UserRepository = Depends(get_user_repository),
    tokens: TokenService = Depends(get_token_service),
) -> Actor:
    """Resolve the bearer token to the acting identity."""
    if credentials is None or not credentials.credentials:
        logger.warning("Authentication failed: no token provided")
        raise UnauthorizedException("Access denied. No token provided.")

    try:
        user_id = tokens.verify(credentials.credentials)
    except InvalidTokenException:
        logger.warning("Authentication failed: invalid or expired token")
        raise

    user = users.get_by_id(user_id)
    if user is None:
        logger.warning("Authentication failed: user not found", user_id=user_id)
        raise InvalidTokenException()

    actor = Actor.from_user(user)
    request.state.actor = actor
    return actor


def require_roles(*roles: Role):
    """Guard composed after authentication: the actor's role must be listed."""
    allowed = frozenset(roles)

    def guard(actor: Actor = Depends(get_current_user)) -> Actor:
        if actor.role not in allowed:
            logger.warning("Authorization failed", role=actor.role.value, allowed=sorted(r.value for r in allowed))
            raise ForbiddenException("Access denied.")
        return actor

    return guard


require_qa = require_roles(Role.QA)
require_course_author = require_roles(Role.LECTURER, Role.QA)
