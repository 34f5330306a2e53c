"""
Tests for GenericBridge with the user strategy.
"""

import uuid
from datetime import datetime, timezone

import bcrypt

from starter_api.models import User
from starter_api.schemas import UserDto
from starter_api.services.crud.bridge import GenericBridge, session_resolver
from starter_api.services.domain.user_service import USER_STRATEGY
from starter_shared.security.password import hash_password, is_hashed


class TestToEntity:
    """Tests for GenericBridge.to_entity()"""

    def test_copies_common_and_user_fields(self):
        dto = UserDto(
            id=uuid.uuid4(),
            created_at=datetime(2024, 1, 2, tzinfo=timezone.utc),
            owner=uuid.uuid4(),
            username="alice",
            email="alice@example.com",
            firstname="Alice",
            enabled=False,
            verified=True,
        )

        user = GenericBridge(USER_STRATEGY).to_entity(dto)

        assert isinstance(user, User)
        assert user.id == dto.id
        assert user.created_at == dto.created_at
        assert user.owner_id == dto.owner
        assert user.username == "alice"
        assert user.email == "alice@example.com"
        assert user.firstname == "Alice"
        assert user.enabled is False
        assert user.verified is True

    def test_hashes_clear_password(self):
        dto = UserDto(username="alice", email="alice@example.com", password="s3cret")

        user = GenericBridge(USER_STRATEGY).to_entity(dto)

        assert is_hashed(user.password)
        assert bcrypt.checkpw(b"s3cret", user.password.encode())

    def test_keeps_existing_bcrypt_hash(self):
        hashed = hash_password("s3cret")
        dto = UserDto(username="alice", email="alice@example.com", password=hashed)

        assert GenericBridge(USER_STRATEGY).to_entity(dto).password == hashed

    def test_hashes_clear_password_with_bcrypt_prefix(self):
        dto = UserDto(username="alice", email="alice@example.com", password="$2b$my-literal-password")

        user = GenericBridge(USER_STRATEGY).to_entity(dto)

        assert user.password != "$2b$my-literal-password"
        assert is_hashed(user.password)
        assert bcrypt.checkpw(b"$2b$my-literal-password", user.password.encode())

    def test_does_not_mutate_dto(self):
        dto = UserDto(username="alice", email="alice@example.com", password="s3cret")

        GenericBridge(USER_STRATEGY).to_entity(dto)

        assert dto.password == "s3cret"
        assert dto.id is None

    def test_without_resolver_references_copied_as_is(self):
        ghost = uuid.uuid4()
        dto = UserDto(username="alice", email="alice@example.com", created_by=ghost)

        user = GenericBridge(USER_STRATEGY).to_entity(dto)

        assert user.created_by_id == ghost


class TestToDto:
    """Tests for GenericBridge.to_dto()"""

    def test_password_never_exposed(self, seed_admin_user):
        dto = GenericBridge(USER_STRATEGY).to_dto(seed_admin_user)

        assert seed_admin_user.password is not None
        assert dto.password is None
        assert "password" in dto.to_json()
        assert dto.to_json()["password"] is None

    def test_references_as_ids(self, seed_owned_user, seed_admin_user):
        dto = GenericBridge(USER_STRATEGY).to_dto(seed_owned_user)

        assert dto.owner == seed_admin_user.id
        assert dto.created_by == seed_admin_user.id
        assert dto.modified_by is None

    def test_wire_names_are_camel_case(self, seed_owned_user):
        data = GenericBridge(USER_STRATEGY).to_dto(seed_owned_user).to_json()

        assert {"id", "createdAt", "createdBy", "modifiedAt", "modifiedBy", "owner"} <= set(data)
        assert data["username"] == "alice"

    def test_list_variants(self, seed_admin_user, seed_owned_user):
        bridge = GenericBridge(USER_STRATEGY)

        dtos = bridge.to_dtos([seed_admin_user, seed_owned_user])
        entities = bridge.to_entities(dtos)

        assert [d.username for d in dtos] == ["admin", "alice"]
        assert [e.id for e in entities] == [seed_admin_user.id, seed_owned_user.id]


class TestReferenceResolver:
    """References checked against the users table."""

    def test_known_reference_kept(self, db_session, seed_admin_user):
        bridge = GenericBridge(USER_STRATEGY, resolver=session_resolver(db_session))
        dto = UserDto(username="bob", email="bob@example.com", owner=seed_admin_user.id)

        assert bridge.to_entity(dto).owner_id == seed_admin_user.id

    def test_unknown_reference_dropped(self, db_session, seed_admin_user):
        bridge = GenericBridge(USER_STRATEGY, resolver=session_resolver(db_session))
        dto = UserDto(
            username="bob",
            email="bob@example.com",
            owner=seed_admin_user.id,
            modified_by=uuid.uuid4(),
        )

        user = bridge.to_entity(dto)

        assert user.owner_id == seed_admin_user.id
        assert user.modified_by_id is None

    def test_resolver_applied_to_dto(self, db_session, seed_owned_user, seed_admin_user):
        seed_owned_user.modified_by_id = uuid.uuid4()
        bridge = GenericBridge(USER_STRATEGY, resolver=session_resolver(db_session))

        dto = bridge.to_dto(seed_owned_user)

        assert dto.modified_by is None
        assert dto.owner == seed_admin_user.id
