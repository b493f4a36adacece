from __future__ import annotations

import secrets
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

import structlog

from docserver.core.cache import ExpiringCache
from docserver.core.core import CachedValue, Service
from docserver.core.modules.session.models import AuthToken
from docserver.core.modules.session.tokens import TokenCodec
from docserver.core.modules.user.models import User
from docserver.core.modules.user.store import UserStore
from docserver.errors import TokenExpiredError, TokenMismatchError, UserNotFoundError
from docserver.utils import now

if TYPE_CHECKING:
    from docserver.core.core import Core

logger = structlog.get_logger(__name__)


def login_key(login: str) -> str:
    return f"auth_{login}"


def token_key(token: str) -> str:
    return f"token_{token}"


class SessionService(Service):
    """Issues, validates and revokes session tokens.

    The user store is authoritative: it holds the single live token of every
    user. The cache only accelerates lookups and is invalidated explicitly on
    every path that changes a user's session.
    """

    def __init__(self, core: Core) -> None:
        super().__init__(core)
        self._tokens = TokenCodec(core.config.jwt_secret, core.config.session_lifetime)

    @property
    def _cache(self) -> ExpiringCache[CachedValue]:
        return self.core.cache

    @property
    def _users(self) -> UserStore:
        return self.core.stores.users

    async def authenticate(self, login: str, password: str) -> AuthToken:
        """Verify credentials and start a new session, superseding any previous one."""
        user = await self.core.services.user.verify_credentials(login, password)

        claims = self._tokens.new_claims(user.id, user.login, now())
        token = self._tokens.issue(claims)
        await self._users.update_token(user.id, token, claims.expires_at)

        self._evict_superseded(user)
        self._cache.set(login_key(user.login), token, self._tokens.lifetime)
        session_user = user.model_copy(update={"token": token, "token_expiry": claims.expires_at})
        self._cache.set(token_key(token), session_user, claims.expires_at - now())

        logger.info("user_authenticated", user_id=user.id, expires_at=claims.expires_at)
        return token

    async def validate_token(self, token: str) -> User:
        """Resolve a bearer token to its user.

        Raises:
            InvalidTokenError: If the token is malformed, forged or past its expiry claim
            UserNotFoundError: If the token's user no longer exists
            TokenMismatchError: If the token is not the user's current session token
            TokenExpiredError: If the stored session has expired
        """
        cached = self._cache.get(token_key(token))
        if isinstance(cached, User):
            return cached

        claims = self._tokens.parse(token)
        user = await self._users.get_by_id(claims.user_id)
        if user is None:
            logger.info("token_rejected", user_id=claims.user_id, reason="user_not_found")
            raise UserNotFoundError

        if not _same_token(user.token, token):
            logger.info("token_rejected", user_id=user.id, reason="token_mismatch")
            raise TokenMismatchError

        remaining = _remaining(user.token_expiry)
        if remaining is None:
            logger.info("token_rejected", user_id=user.id, reason="token_expired")
            raise TokenExpiredError

        self._cache.set(token_key(token), user, remaining)

        # A logout or newer login may have updated the store between the read and the set
        current = await self._users.get_by_id(user.id)
        if current is None or not _same_token(current.token, token):
            self._cache.delete(token_key(token))
            logger.info("token_rejected", user_id=user.id, reason="superseded_during_validation")
            raise TokenMismatchError
        return user

    async def logout(self, token: str) -> None:
        """Revoke the session identified by token.

        The stored session is cleared only when token is still the user's
        current one, so a superseded token cannot end a newer session.
        """
        claims = self._tokens.parse(token)
        self._evict(claims.login, token)

        user = await self._users.get_by_id(claims.user_id)
        if user is not None and _same_token(user.token, token):
            await self._users.update_token(user.id, None, None)
            # A validation that read the store before the update may have repopulated the cache
            self._evict(claims.login, token)
        logger.info("user_logged_out", user_id=claims.user_id)

    def _evict(self, login: str, token: str) -> None:
        self._cache.delete(login_key(login))
        self._cache.delete(token_key(token))

    def _evict_superseded(self, user: User) -> None:
        """Drop cached lookups for tokens the user held before this login."""
        for token in (user.token, self._cache.get(login_key(user.login))):
            if isinstance(token, str):
                self._cache.delete(token_key(token))


def _same_token(stored: str | None, presented: str) -> bool:
    if stored is None:
        return False
    return secrets.compare_digest(stored.encode("utf-8"), presented.encode("utf-8"))


def _remaining(expiry: datetime | None) -> timedelta | None:
    if expiry is None:
        return None
    remaining = expiry - now()
    if remaining.total_seconds() <= 0:
        return None
    return remaining
