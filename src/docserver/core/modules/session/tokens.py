"""Signed, time-bounded session tokens (HS256 JWT)."""

import secrets
from datetime import datetime, timedelta
from uuid import UUID

import jwt
import pydantic

from docserver.core.modules.session.models import AuthToken, SessionClaims
from docserver.errors import InvalidTokenError

ALGORITHM = "HS256"
ISSUER = "docserver"


class TokenCodec:
    """Issues and verifies session tokens with a shared HMAC secret."""

    def __init__(self, secret: str, lifetime: timedelta) -> None:
        if not secret:
            raise ValueError("Token secret cannot be empty")
        self._secret = secret
        self.lifetime = lifetime

    def issue(self, claims: SessionClaims) -> AuthToken:
        payload = {
            "user_id": str(claims.user_id),
            "login": claims.login,
            "iat": claims.issued_at,
            "exp": claims.expires_at,
            "iss": ISSUER,
            "jti": claims.token_id,
        }
        return AuthToken(jwt.encode(payload, self._secret, algorithm=ALGORITHM))

    def new_claims(self, user_id: UUID, login: str, issued_at: datetime) -> SessionClaims:
        """Build claims for a session starting at issued_at.

        JWT timestamps have one-second resolution, so issued_at is truncated
        to whole seconds and the stored expiry matches the signed one exactly.
        """
        issued_at = issued_at.replace(microsecond=0)
        return SessionClaims(
            user_id=user_id,
            login=login,
            issued_at=issued_at,
            expires_at=issued_at + self.lifetime,
            token_id=secrets.token_urlsafe(16),
        )

    def parse(self, token: str) -> SessionClaims:
        """Verify signature, issuer and expiry, and return the embedded claims.

        Raises:
            InvalidTokenError: If the token fails any check
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                issuer=ISSUER,
                options={"require": ["exp", "iat", "iss", "jti"]},
            )
            return SessionClaims(
                user_id=payload["user_id"],
                login=payload["login"],
                issued_at=payload["iat"],
                expires_at=payload["exp"],
                token_id=payload["jti"],
            )
        except (jwt.PyJWTError, pydantic.ValidationError, KeyError) as e:
            raise InvalidTokenError from e
