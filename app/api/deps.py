"""
API dependency injection module.

Authentication and capability checks run as FastAPI dependencies, i.e. before
the endpoint body is invoked. A check that fails raises an ``AppError`` which
the handlers in ``app.main`` render into the response envelope.
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import AuthenticationError, AuthorizationError
from app.core.security import decode_access_token
from app.db.async_session import get_async_db
from app.models.permission import Capability
from app.models.user import User
from app.repositories.users import by_id

logger = logging.getLogger(__name__)

# auto_error=False so that public routes can still run without a token
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_PREFIX}/auth/token", auto_error=False)


async def get_optional_user(
    db: AsyncSession = Depends(get_async_db),
    token: Optional[str] = Depends(oauth2_scheme),
) -> Optional[User]:
    """
    Resolve the bearer token to a live user, or None when no token was sent.

    Raises:
        AuthenticationError: If a token was sent but is invalid, or its user
            no longer exists or has been deleted
    """
    if not token:
        return None

    user_id = decode_access_token(token)
    result = await db.execute(by_id(user_id))
    user = result.scalar_one_or_none()

    if user is None:
        logger.warning(f"Token subject {user_id} does not resolve to a live user")
        raise AuthenticationError("Could not validate credentials")
    return user


async def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    """Require an authenticated user."""
    if user is None:
        raise AuthenticationError()
    return user


def authorize(user: User, capability: Capability) -> None:
    """Raise AuthorizationError unless ``user`` holds ``capability``."""
    if not user.has_capability(capability.value):
        logger.info(f"User {user.id} denied '{capability.value}'")
        raise AuthorizationError(f"Not authorized to {capability.value}")


class RequireCapability:
    """
    Dependency gating an endpoint on a named capability.

    Args:
        capability: Capability the caller must hold
        public_setting: Name of a boolean setting; when it is true the
            endpoint is open to anonymous callers and no capability is checked
    """

    def __init__(self, capability: Capability, public_setting: Optional[str] = None):
        self.capability = capability
        self.public_setting = public_setting

    async def __call__(self, user: Optional[User] = Depends(get_optional_user)) -> Optional[User]:
        if self.public_setting and getattr(settings, self.public_setting):
            return user
        if user is None:
            raise AuthenticationError()
        authorize(user, self.capability)
        return user
