from docserver.core.core import Service
from docserver.core.modules.access.rules import can_delete, can_read
from docserver.core.modules.document.models import Document
from docserver.core.modules.session.models import AuthToken
from docserver.core.modules.user.models import User
from docserver.errors import AccessDeniedError


class AccessService(Service):
    async def ensure_authenticated(self, auth_token: AuthToken) -> User:
        """Ensure the user is authenticated."""
        return await self.core.services.session.validate_token(auth_token)

    def ensure_can_read(self, user: User, document: Document) -> None:
        """Raise AccessDeniedError unless the user may read the document."""
        if not can_read(user, document):
            raise AccessDeniedError(f"Access denied: user '{user.id}' cannot read document '{document.id}'")

    def ensure_can_delete(self, user: User, document: Document) -> None:
        """Raise AccessDeniedError unless the user owns the document."""
        if not can_delete(user, document):
            raise AccessDeniedError(f"Access denied: user '{user.id}' does not own document '{document.id}'")
