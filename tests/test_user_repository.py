"""
Tests for GenericRepository and UserRepository.

Tests cover:
- Lookups by id, owner scope and natural keys
- Duplicate detection
- Paging
- Substring search
- Flag updates
- Reference cleanup before delete
"""

import uuid

import pytest

from starter_api.models import User
from starter_api.repositories import UserRepository
from starter_api.services.crud.sorting import parse_sort


@pytest.fixture
def repo(db_session):
    return UserRepository(db_session)


class TestFinders:
    """Tests for id and owner scoped lookups."""

    def test_find_by_id(self, repo, seed_admin_user):
        assert repo.find_by_id(seed_admin_user.id) == seed_admin_user
        assert repo.find_by_id(uuid.uuid4()) is None

    def test_find_by_id_and_owner(self, repo, seed_owned_user, seed_admin_user):
        assert repo.find_by_id_and_owner(seed_owned_user.id, seed_admin_user) == seed_owned_user
        assert repo.find_by_id_and_owner(seed_owned_user.id, seed_admin_user.id) == seed_owned_user

    def test_find_by_id_and_owner_foreign_looks_missing(self, repo, seed_owned_user, make_user):
        stranger = make_user("mallory")

        assert repo.find_by_id_and_owner(seed_owned_user.id, stranger) is None
        assert repo.find_by_id_and_owner(uuid.uuid4(), stranger) is None

    def test_find_by_username_and_email_ignore_case(self, repo, seed_owned_user):
        assert repo.find_by_username("ALICE") == seed_owned_user
        assert repo.find_by_email("Alice@Example.COM") == seed_owned_user
        assert repo.find_by_username("nobody") is None

    def test_find_by_username_or_email(self, repo, seed_owned_user):
        assert repo.find_by_username_or_email("alice", None) == seed_owned_user
        assert repo.find_by_username_or_email(None, "ALICE@example.com") == seed_owned_user
        assert repo.find_by_username_or_email("nobody", "alice@example.com") == seed_owned_user
        assert repo.find_by_username_or_email("nobody", "nobody@example.com") is None
        assert repo.find_by_username_or_email(None, None) is None

    def test_count(self, repo, seed_owned_user):
        assert repo.count() == 2


class TestExists:
    """Tests for duplicate detection."""

    def test_by_id(self, repo, seed_admin_user):
        assert repo.exists(seed_admin_user.id)
        assert not repo.exists(uuid.uuid4())

    def test_by_username_ignoring_case(self, repo, seed_admin_user):
        assert repo.exists(None, username="ADMIN")

    def test_by_email_ignoring_case(self, repo, seed_admin_user):
        assert repo.exists(None, email="Admin@Test.com")

    def test_any_match_is_enough(self, repo, seed_admin_user):
        assert repo.exists(uuid.uuid4(), username="someone-else", email="admin@test.com")

    def test_none_criteria_ignored(self, repo, seed_admin_user):
        assert not repo.exists(None, username=None, email=None)
        assert not repo.exists(None, username="fresh", email=None)


class TestPaging:
    """Tests for find_page()"""

    @pytest.fixture
    def five_users(self, make_user):
        return [make_user(f"user{i}") for i in range(5)]

    def test_pages(self, repo, five_users):
        sort = parse_sort("username,ASC")

        first = repo.find_page(0, 2, sort)
        last = repo.find_page(2, 2, sort)

        assert [u.username for u in first.content] == ["user0", "user1"]
        assert [u.username for u in last.content] == ["user4"]
        assert first.total_elements == 5
        assert first.total_pages == 3
        assert first.number == 0

    def test_past_the_end_is_empty(self, repo, five_users):
        page = repo.find_page(3, 2)
        assert page.content == []
        assert page.total_pages == 3

    def test_empty_table(self, repo):
        page = repo.find_page(0, 10)
        assert page.content == []
        assert page.total_elements == 0
        assert page.total_pages == 0


class TestSearch:
    """Tests for substring search."""

    @pytest.fixture
    def users(self, make_user):
        make_user("alice", email="alice@wonder.land")
        make_user("malice", email="m@evil.org")
        make_user("bob", email="bob@wonder.land")

    def test_containing_username(self, repo, users):
        names = {u.username for u in repo.find_all_containing_username("ALIC")}
        assert names == {"alice", "malice"}

    def test_containing_email(self, repo, users):
        names = {u.username for u in repo.find_all_containing_email("WONDER")}
        assert names == {"alice", "bob"}

    def test_containing_username_or_email(self, repo, users):
        names = {u.username for u in repo.find_all_containing_username_or_email("bob", "evil")}
        assert names == {"bob", "malice"}

    def test_wildcards_are_literal(self, repo, users):
        assert repo.find_all_containing_username("%") == []


class TestFlags:
    """Tests for enabled / verified updates."""

    def test_set_enabled(self, repo, seed_admin_user):
        user = repo.set_enabled(seed_admin_user.id, False)
        assert user.enabled is False

    def test_set_enabled_missing(self, repo):
        assert repo.set_enabled(uuid.uuid4(), False) is None

    def test_set_verified_by_owner(self, repo, seed_owned_user, seed_admin_user):
        user = repo.set_verified_by_owner(seed_owned_user.id, False, seed_admin_user)
        assert user.verified is False

    def test_set_enabled_by_wrong_owner(self, repo, seed_owned_user, make_user):
        stranger = make_user("mallory")
        assert repo.set_enabled_by_owner(seed_owned_user.id, False, stranger) is None
        assert seed_owned_user.enabled is True


class TestClearReferences:
    """Tests for clear_references()"""

    def test_nulls_every_reference(self, db_session, repo, seed_admin_user, make_user):
        other = make_user(
            "bob",
            owner_id=seed_admin_user.id,
            created_by_id=seed_admin_user.id,
            modified_by_id=seed_admin_user.id,
        )

        repo.clear_references(seed_admin_user.id)
        db_session.commit()

        db_session.refresh(other)
        assert other.owner_id is None
        assert other.created_by_id is None
        assert other.modified_by_id is None

    def test_other_references_untouched(self, db_session, repo, seed_owned_user, seed_admin_user, make_user):
        third = make_user("carol")
        bob = make_user("bob", owner_id=third.id)

        repo.clear_references(seed_admin_user.id)
        db_session.commit()

        db_session.refresh(bob)
        db_session.refresh(seed_owned_user)
        assert bob.owner_id == third.id
        assert seed_owned_user.owner_id is None
        assert db_session.get(User, seed_admin_user.id) is not None

    def test_stamps_modified_at(self, db_session, repo, seed_owned_user, seed_admin_user):
        assert seed_owned_user.modified_at is None

        repo.clear_references(seed_admin_user.id)
        db_session.commit()

        db_session.refresh(seed_owned_user)
        assert seed_owned_user.modified_at is not None
