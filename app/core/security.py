"""Bearer-token authentication dependency for FastAPI."""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.dependencies import get_auth_service
from app.core.exceptions import AuthenticationException
from app.models.auth import AuthenticatedUser
from app.services.auth_service import AuthService

logger = logging.getLogger(__name__)

# HTTP Bearer scheme for Authorization header
security = HTTPBearer(auto_error=False)


async def require_auth(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """
    Resolve the caller from `Authorization: Bearer <token>`.

    Raises AuthenticationException (rendered as 401) when the header is
    missing or the identity provider rejects the token.
    """
    if not credentials or not credentials.credentials:
        raise AuthenticationException()

    user = auth_service.verify_token(credentials.credentials)
    logger.debug(f"Authenticated user {user.id}")
    return user
