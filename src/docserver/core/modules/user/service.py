import secrets
from functools import cached_property

import bcrypt
import structlog

from docserver.core.core import Service
from docserver.core.modules.user.models import User
from docserver.core.modules.user.store import UserStore
from docserver.core.modules.user.validators import MAX_PASSWORD_BYTES, validate_login, validate_password
from docserver.errors import InvalidAdminTokenError, InvalidCredentialsError, InvalidLoginError, NotFoundError

logger = structlog.get_logger(__name__)


class UserService(Service):
    """Registers users and verifies their credentials against the user store."""

    @property
    def store(self) -> UserStore:
        return self.core.stores.users

    @cached_property
    def _dummy_hash(self) -> bytes:
        # Checked when the login is unknown so both failure paths cost the same
        return bcrypt.hashpw(secrets.token_hex(16).encode("ascii"), bcrypt.gensalt(rounds=self.core.config.bcrypt_rounds))

    async def on_start(self) -> None:
        """Create user indexes."""
        await self.store.create_indexes()

    async def get_user_by_login(self, login: str) -> User:
        """Get user by login."""
        user = await self.store.get_by_login(login)
        if user is None:
            raise NotFoundError(f"User '{login}' not found")
        return user

    async def register(self, admin_token: str, login: str, password: str) -> User:
        """Create user with hashed password, gated by the administrative secret."""
        if not secrets.compare_digest(admin_token.encode("utf-8"), self.core.config.admin_token.encode("utf-8")):
            logger.warning("registration_rejected", login=login, reason="invalid_admin_token")
            raise InvalidAdminTokenError

        validate_login(login)
        validate_password(password)

        if await self.store.get_by_login(login) is not None:
            raise InvalidLoginError(f"User '{login}' already exists")

        password_hash = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=self.core.config.bcrypt_rounds))
        user = User(login=login, password_hash=password_hash.decode("utf-8"))
        await self.store.create(user)
        logger.info("user_registered", user_id=user.id, login=login)
        return user

    async def verify_credentials(self, login: str, password: str) -> User:
        """Return the user if the password matches, raise InvalidCredentialsError otherwise."""
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            # No registered password is this long, and bcrypt refuses it
            raise InvalidCredentialsError
        user = await self.store.get_by_login(login)
        password_hash = user.password_hash.encode("utf-8") if user is not None else self._dummy_hash
        if not bcrypt.checkpw(password.encode("utf-8"), password_hash) or user is None:
            raise InvalidCredentialsError
        return user
