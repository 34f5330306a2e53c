"""
Tests for the transport-agnostic controllers.

Outcomes are checked directly, without going through HTTP.
"""

import uuid
from unittest.mock import MagicMock

import pytest

from starter_api.controllers import ResponseOutcome, UserController
from starter_api.controllers.base import parse_id
from starter_api.models import User
from starter_api.schemas import UserDto
from starter_shared.i18n.messages import MessageSource
from starter_shared.utils.exceptions import EntityNotFoundError, PageNotFoundError


@pytest.fixture
def controller(user_service):
    return UserController(user_service, MessageSource(default_locale="en"))


class TestParseId:
    def test_valid(self):
        value = uuid.uuid4()
        assert parse_id(str(value)) == value
        assert parse_id(value) == value

    @pytest.mark.parametrize("raw", ["", "not-a-uuid", None, "123"])
    def test_malformed(self, raw):
        assert parse_id(raw) is None


class TestGetById:
    def test_found(self, controller, seed_admin_user):
        outcome = controller.get_by_id(str(seed_admin_user.id))

        assert outcome.status_code == 200
        assert outcome.body.id == seed_admin_user.id
        assert outcome.body.password is None

    def test_unknown(self, controller):
        with pytest.raises(EntityNotFoundError):
            controller.get_by_id(str(uuid.uuid4()))

    def test_malformed(self, controller):
        with pytest.raises(EntityNotFoundError):
            controller.get_by_id("not-a-uuid")


class TestListAll:
    def test_sorted(self, controller, make_user):
        for name in ("carol", "alice", "bob"):
            make_user(name)

        outcome = controller.list_all("username,DESC")

        assert outcome.status_code == 200
        assert [dto.username for dto in outcome.body] == ["carol", "bob", "alice"]

    def test_malformed_sort_falls_back_to_store_order(self, controller, make_user):
        make_user("alice")

        outcome = controller.list_all("a,,,")

        assert outcome.status_code == 200
        assert [dto.username for dto in outcome.body] == ["alice"]


class TestListPaginated:
    @pytest.fixture
    def three_users(self, make_user):
        return [make_user(name) for name in ("alice", "bob", "carol")]

    def test_first_page(self, controller, three_users):
        outcome = controller.list_paginated("username,ASC", 0, 2)

        assert outcome.status_code == 200
        assert [dto.username for dto in outcome.body] == ["alice", "bob"]

    def test_last_page(self, controller, three_users):
        outcome = controller.list_paginated("username,ASC", 1, 2)
        assert [dto.username for dto in outcome.body] == ["carol"]

    def test_page_equal_to_total_pages_is_empty(self, controller, three_users):
        outcome = controller.list_paginated("username,ASC", 2, 2)

        assert outcome.status_code == 200
        assert outcome.body == []

    def test_page_beyond_total_pages(self, controller, three_users):
        with pytest.raises(PageNotFoundError) as exc_info:
            controller.list_paginated("username,ASC", 5, 2)

        assert exc_info.value.page == 5
        assert exc_info.value.total_pages == 2
        assert exc_info.value.detail == "Page 5 not found, available pages: 2"

    def test_localized_message(self, controller, three_users):
        with pytest.raises(PageNotFoundError) as exc_info:
            controller.list_paginated(None, 5, 2, locale="es-AR")

        assert exc_info.value.detail == "Página 5 no encontrada, páginas disponibles: 2"

    def test_negative_page(self, controller, three_users):
        with pytest.raises(PageNotFoundError) as exc_info:
            controller.list_paginated("username,ASC", -1, 2)

        assert exc_info.value.page == -1
        assert exc_info.value.detail == "Page -1 not found, available pages: 2"

    def test_page_zero_without_records(self, controller):
        outcome = controller.list_paginated(None, 0, 10)

        assert outcome.status_code == 200
        assert outcome.body == []

    def test_page_one_without_records(self, controller):
        with pytest.raises(PageNotFoundError) as exc_info:
            controller.list_paginated(None, 1, 10)
        assert exc_info.value.total_pages == 0


class TestAdd:
    def test_created(self, controller):
        dto = UserDto(username="bob", email="bob@example.com", password="s3cret")

        outcome = controller.add(dto, base_url="http://localhost/api")

        assert outcome.status_code == 201
        assert outcome.body.id is not None
        assert outcome.body.password is None
        assert outcome.headers["Location"] == f"http://localhost/api/users/{outcome.body.id}"

    def test_conflict(self, controller, seed_admin_user):
        dto = UserDto(username="Admin", email="fresh@example.com")

        outcome = controller.add(dto)

        assert outcome == ResponseOutcome(409)


class TestUpdate:
    def test_ok(self, controller, seed_owned_user):
        dto = UserDto(id=seed_owned_user.id, username="alice", email="alice@example.com", lastname="Liddell")

        outcome = controller.update(str(seed_owned_user.id), dto)

        assert outcome.status_code == 200
        assert outcome.body.lastname == "Liddell"

    def test_unknown(self, controller):
        unknown = uuid.uuid4()
        dto = UserDto(id=unknown, username="ghost", email="ghost@example.com")

        assert controller.update(str(unknown), dto).status_code == 404

    @pytest.mark.parametrize("body_id", [None, "other"])
    def test_bad_request_without_storage_call(self, body_id):
        service = MagicMock()
        controller = UserController(service)
        path_id = str(uuid.uuid4())
        dto = UserDto(id=uuid.uuid4() if body_id == "other" else None, username="x", email="x@example.com")

        outcome = controller.update(path_id, dto)

        assert outcome.status_code == 400
        assert outcome.body is None
        service.update.assert_not_called()
        service.to_entity.assert_not_called()

    def test_bad_request_without_body(self):
        service = MagicMock()

        outcome = UserController(service).update(str(uuid.uuid4()), None)

        assert outcome.status_code == 400
        service.update.assert_not_called()


class TestDelete:
    def test_deleted(self, controller, db_session, seed_admin_user):
        user_id = seed_admin_user.id

        assert controller.delete(str(user_id)).status_code == 204
        assert db_session.get(User, user_id) is None

    def test_unknown(self, controller):
        assert controller.delete(str(uuid.uuid4())).status_code == 404

    def test_malformed(self, controller):
        assert controller.delete("nope").status_code == 404


class TestDeleteAll:
    def test_all_deleted(self, controller, user_service, make_user):
        ids = [str(make_user(name).id) for name in ("a", "b")]

        outcome = controller.delete_all(",".join(ids))

        assert outcome.status_code == 204
        assert user_service.repo.count() == 0

    def test_partial_failure_keeps_successful_deletes(self, controller, user_service, make_user):
        existing = make_user("a")

        outcome = controller.delete_all(f"{uuid.uuid4()},{existing.id}")

        assert outcome.status_code == 409
        assert user_service.repo.count() == 0

    def test_malformed_ids_skipped(self, controller, user_service, make_user):
        existing = make_user("a")

        outcome = controller.delete_all(f"garbage,{existing.id},")

        assert outcome.status_code == 204
        assert user_service.repo.count() == 0


class TestUserLookup:
    def test_get_by_username_or_email(self, controller, seed_owned_user):
        outcome = controller.get_by_username_or_email(None, "ALICE@example.com")

        assert outcome.status_code == 200
        assert outcome.body.username == "alice"

    def test_get_by_username_or_email_missing(self, controller):
        assert controller.get_by_username_or_email("ghost", None) == ResponseOutcome(404)

    def test_search(self, controller, seed_owned_user, seed_admin_user):
        assert [d.username for d in controller.search("LIC", None).body] == ["alice"]
        assert [d.username for d in controller.search(None, "test.com").body] == ["admin"]
        assert controller.search(None, None).body == []
