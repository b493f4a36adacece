"""Document access decisions.

Pure functions of an authenticated user and a document: no I/O, no caching.
"""

from docserver.core.modules.document.models import Document
from docserver.core.modules.user.models import User


def is_owner(user: User, document: Document) -> bool:
    return document.owner == user.id


def can_read(user: User, document: Document) -> bool:
    """Owner, any user when the document is public, or a grantee."""
    return is_owner(user, document) or document.public or user.login in document.grant


def can_delete(user: User, document: Document) -> bool:
    """Only the owner. Public visibility and grants never confer delete rights."""
    return is_owner(user, document)
