"""
Auth Service - ISO 27001 Risk Assessment
app/services/auth_service.py

Thin wrapper over Supabase Auth: admin sign-up, password sign-in and
access-token verification.
"""

import logging
from typing import Any, Callable, Optional

from supabase import Client

from app.core.exceptions import AuthenticationException, IdentityProviderException
from app.models.auth import AuthenticatedUser, LoginResponse
from app.services.supabase_client import get_supabase

logger = logging.getLogger(__name__)


def _provider_message(error: Exception) -> str:
    return getattr(error, "message", None) or str(error) or "Identity provider error"


def to_authenticated_user(user: Any) -> AuthenticatedUser:
    """Map a Supabase user object onto AuthenticatedUser."""
    metadata = dict(getattr(user, "user_metadata", None) or {})
    return AuthenticatedUser(
        id=str(user.id),
        email=getattr(user, "email", None),
        name=metadata.get("name"),
        company_name=metadata.get("companyName"),
        location=metadata.get("location"),
        metadata=metadata,
    )


class AuthService:
    """Identity operations delegated to Supabase Auth."""

    def __init__(self, client_factory: Callable[[], Client] = get_supabase):
        self._client_factory = client_factory
        self._client: Optional[Client] = None

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = self._client_factory()
        return self._client

    def sign_up(
        self,
        email: str,
        password: str,
        name: str,
        company_name: str,
        location: str,
    ) -> AuthenticatedUser:
        """
        Create a confirmed user with profile metadata.

        Raises:
            IdentityProviderException: Supabase rejected the user
        """
        try:
            response = self.client.auth.admin.create_user({
                "email": email,
                "password": password,
                "user_metadata": {
                    "name": name,
                    "companyName": company_name,
                    "location": location,
                },
                # accounts are confirmed on creation
                "email_confirm": True,
            })
        except Exception as e:
            logger.warning(f"Signup error for {email}: {e}")
            raise IdentityProviderException(_provider_message(e))

        if not response or not response.user:
            raise IdentityProviderException("Failed to sign up")

        logger.info(f"Created user {response.user.id}")
        return to_authenticated_user(response.user)

    def sign_in(self, email: str, password: str) -> LoginResponse:
        """
        Password sign-in.

        Raises:
            IdentityProviderException: bad credentials or provider failure
        """
        try:
            response = self.client.auth.sign_in_with_password({
                "email": email,
                "password": password,
            })
        except Exception as e:
            logger.warning(f"Sign-in error for {email}: {e}")
            raise IdentityProviderException(_provider_message(e))

        if not response or not response.session or not response.user:
            raise IdentityProviderException("Invalid login credentials")

        session = response.session
        return LoginResponse(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            expires_at=session.expires_at,
            user=to_authenticated_user(response.user),
        )

    def verify_token(self, token: Optional[str]) -> AuthenticatedUser:
        """
        Resolve an access token to its user.

        Raises:
            AuthenticationException: missing, expired or rejected token
        """
        if not token:
            raise AuthenticationException()

        try:
            response = self.client.auth.get_user(token)
        except Exception as e:
            logger.debug(f"Token verification failed: {e}")
            raise AuthenticationException()

        if not response or not response.user:
            raise AuthenticationException()

        return to_authenticated_user(response.user)
