"""JWT token domain service."""

import logfire

from tally.config import AuthSettings
from tally.util.jwt import verify_token, TokenPayload

from .base import Service


class JWTService(Service):
    """Domain service for reading the member behind an auth token.

    Tokens are issued by the account service; this side only needs to verify
    them and extract the user ID.
    """

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            return verify_token(token, self.auth_settings)

    def get_user_id_from_token(self, token: str | None) -> str | None:
        """Extract user ID from JWT token without raising exceptions.

        Args:
            token: JWT token string (optional)

        Returns:
            User ID if token is valid, None if token is missing or invalid
        """
        if not token:
            return None

        try:
            payload = self.verify_token(token)
            return payload.user_id
        except Exception as e:
            # Invalid or expired token, treat as anonymous
            logfire.debug(
                "JWT verification failed, treating as anonymous", error=str(e)
            )
            return None
