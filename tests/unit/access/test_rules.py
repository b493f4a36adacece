"""Tests for document access decisions."""

from uuid import UUID

import pytest

from docserver.core.modules.access.rules import can_delete, can_read
from docserver.core.modules.document.models import Document
from docserver.core.modules.user.models import User

OWNER_ID = UUID("01900000-0000-7000-8000-000000000001")


def make_user(login: str, user_id: UUID | None = None) -> User:
    user = User(login=login, password_hash="$2b$04$hashed_password_here")
    if user_id is not None:
        user = user.model_copy(update={"id": user_id})
    return user


def make_document(public: bool = False, grant: list[str] | None = None) -> Document:
    return Document(name="report", mime="application/json", file=False, public=public, grant=grant or [], owner=OWNER_ID)


@pytest.fixture
def owner():
    return make_user("owner1234", OWNER_ID)


@pytest.fixture
def bob():
    return make_user("bob12345")


@pytest.fixture
def carol():
    return make_user("carol1234")


class TestCanRead:
    @pytest.mark.parametrize(("public", "grant"), [(False, []), (True, []), (False, ["bob12345"]), (True, ["x"])])
    def test_owner_always_reads(self, owner, public, grant):
        assert can_read(owner, make_document(public, grant))

    def test_public_readable_by_anyone(self, bob, carol):
        document = make_document(public=True)
        assert can_read(bob, document)
        assert can_read(carol, document)

    def test_private_readable_only_by_grantees(self, owner, bob, carol):
        document = make_document(grant=["bob12345"])
        assert can_read(owner, document)
        assert can_read(bob, document)
        assert not can_read(carol, document)

    def test_private_without_grants(self, carol):
        assert not can_read(carol, make_document())

    def test_grant_matches_exact_login(self):
        assert not can_read(make_user("bob123456"), make_document(grant=["bob12345"]))


class TestCanDelete:
    def test_owner_deletes(self, owner):
        assert can_delete(owner, make_document())

    @pytest.mark.parametrize(("public", "grant"), [(False, []), (True, []), (False, ["bob12345"]), (True, ["bob12345"])])
    def test_non_owner_never_deletes(self, bob, public, grant):
        assert not can_delete(bob, make_document(public, grant))

    def test_same_login_different_id_is_not_owner(self):
        impostor = make_user("owner1234")
        assert not can_delete(impostor, make_document())
