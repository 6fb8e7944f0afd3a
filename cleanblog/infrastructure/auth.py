"""
Infrastructure Layer - JWT authentication service.

Tokens are HMAC-signed with ``sub`` (user id), ``iat`` and ``exp`` claims.
"""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from ..application.dtos import RequestContext
from ..application.ports import AuthService, AuthenticationError


class JWTAuthService(AuthService):
    """python-jose implementation of AuthService."""

    def __init__(
        self,
        secret: str,
        expires_in: timedelta = timedelta(hours=24),
        algorithm: str = "HS256",
    ):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self.secret = secret
        self.expires_in = expires_in
        self.algorithm = algorithm

    def generate_token(self, user_id: int) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            # jose only accepts string subjects
            "sub": str(user_id),
            "iat": now,
            "exp": now + self.expires_in,
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def validate_token(self, token: str) -> int:
        """Decode a token and return its user id."""
        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            raise AuthenticationError(f"invalid token: {e}") from e

        subject = claims.get("sub")
        try:
            return int(subject)
        except (TypeError, ValueError) as e:
            raise AuthenticationError("invalid token subject") from e

    def get_user_id_from_context(self, ctx: RequestContext) -> int:
        if ctx is None or ctx.user_id is None:
            raise AuthenticationError("user ID not found in context")
        return ctx.user_id
