"""Bearer token authentication backend for Django REST Framework.

Access tokens are issued by the platform auth service (Supabase-style JWTs
whose ``sub`` claim is the caller's profile id). Two validation modes:
1. Local JWT Validation: verifies the HS256 signature with the shared secret
2. Token Introspection: asks the auth service's user endpoint about the token
"""

from typing import Any, cast
from uuid import UUID

from django.conf import settings
from django.core.cache import cache

import jwt
import requests
import structlog
from rest_framework import authentication, exceptions

from social.auth.context import set_current_user

logger = structlog.get_logger(__name__)


class AuthenticatedUser:
    """Principal for bearer-authenticated requests.

    This is not a Django User model, just a container for token claims.
    """

    def __init__(self, user_id: str, email: str | None = None, role: str = ""):
        """Initialize authenticated user.

        Args:
            user_id: Profile id taken from the token subject
            email: Email claim, if present
            role: Auth role claim (e.g. "authenticated")
        """
        self.user_id = user_id
        self.id = user_id
        self.email = email
        self.role = role
        self.is_authenticated = True

    @property
    def profile_id(self) -> UUID:
        """Profile id as a UUID."""
        return UUID(str(self.user_id))

    def __str__(self):
        """String representation."""
        return f"AuthenticatedUser(user_id={self.user_id}, role={self.role})"


class BearerTokenAuthentication(authentication.BaseAuthentication):
    """Bearer token authentication.

    Extracts the token from the Authorization header, validates it and
    stores the resulting principal in the security context for services.
    """

    def authenticate(self, request):
        """Authenticate the request using a Bearer token.

        Args:
            request: DRF request object

        Returns:
            Tuple of (user, token) or None if authentication not attempted

        Raises:
            AuthenticationFailed: If authentication fails
        """
        auth_header = request.headers.get("authorization")
        if not auth_header:
            return None

        parts = auth_header.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise exceptions.AuthenticationFailed("Invalid authorization header format")

        token = parts[1]

        if settings.AUTH_INTROSPECTION_ENABLED:
            token_data = self._validate_via_introspection(token)
        else:
            token_data = self._validate_via_jwt(token)

        subject = token_data.get("sub")
        try:
            UUID(str(subject))
        except ValueError as e:
            logger.warning("Token subject is not a profile id", subject=subject)
            raise exceptions.AuthenticationFailed("Invalid token subject") from e

        user = AuthenticatedUser(
            user_id=str(subject),
            email=token_data.get("email"),
            role=token_data.get("role", ""),
        )
        set_current_user(user)

        return (user, token)

    def _validate_via_introspection(self, token: str) -> dict[str, Any]:
        """Validate token by fetching its user from the auth service.

        Args:
            token: Access token to validate

        Returns:
            Normalised token data with sub, email and role

        Raises:
            AuthenticationFailed: If token is invalid
        """
        cache_key = f"{settings.AUTH_TOKEN_CACHE_PREFIX}{token[-32:]}"
        cached_data = cache.get(cache_key)
        if cached_data:
            logger.debug("Using cached token introspection result")
            return cast("dict[str, Any]", cached_data)

        try:
            logger.debug("Calling auth service user endpoint")
            response = requests.get(
                settings.AUTH_USER_URL,
                headers={
                    "Authorization": f"Bearer {token}",
                    "apikey": settings.AUTH_SERVICE_API_KEY,
                },
                timeout=settings.AUTH_REQUEST_TIMEOUT,
            )
        except requests.RequestException as e:
            logger.error("Token introspection request failed", error=str(e))
            raise exceptions.AuthenticationFailed(
                "Token validation service unavailable"
            ) from e

        if response.status_code != 200:
            logger.warning(
                "Token introspection failed",
                status_code=response.status_code,
            )
            raise exceptions.AuthenticationFailed("Token is not active")

        user_data = response.json()
        data = {
            "sub": user_data.get("id"),
            "email": user_data.get("email"),
            "role": user_data.get("role", ""),
        }
        cache.set(cache_key, data, timeout=settings.AUTH_TOKEN_CACHE_TTL)

        return data

    def _validate_via_jwt(self, token: str) -> dict[str, Any]:
        """Validate token locally by verifying the JWT signature.

        Args:
            token: JWT access token to validate

        Returns:
            Token claims/payload

        Raises:
            AuthenticationFailed: If token is invalid
        """
        if not settings.JWT_SECRET:
            logger.error("JWT_SECRET not configured but local validation is enabled")
            raise exceptions.AuthenticationFailed("JWT validation not configured")

        try:
            payload = jwt.decode(
                token,
                settings.JWT_SECRET,
                algorithms=settings.JWT_ALGORITHMS,
                audience=settings.JWT_AUDIENCE,
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            logger.info("JWT token has expired")
            raise exceptions.AuthenticationFailed("Token has expired") from e
        except jwt.InvalidTokenError as e:
            logger.warning("Invalid JWT token", error=str(e))
            raise exceptions.AuthenticationFailed("Invalid token") from e

        return {
            "sub": payload.get("sub"),
            "email": payload.get("email"),
            "role": payload.get("role", ""),
        }

    def authenticate_header(self, _request):
        """Return WWW-Authenticate header value for 401 responses."""
        return "Bearer"
