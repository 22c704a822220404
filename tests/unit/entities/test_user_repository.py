"""Tests for the user repository."""

from src.directory.core.query.filters import build_filter
from src.directory.core.query.paging import PageRequest
from src.directory.core.query.sorting import resolve_sort
from src.directory.core.types import Gender
from src.directory.entities.core.user import User, UserRepository


class TestUserRepository:
    def test_create_assigns_id_and_timestamp(self, session):
        repo = UserRepository(session)

        user = repo.create(
            {
                "first_name": "Ada",
                "last_name": "Lovelace",
                "email": "ada@engine.org",
                "gender": "FEMALE",
                "phone": "555-123-4567",
            },
            user_id=7,
        )

        assert isinstance(user, User)
        assert user.id == 7
        assert user.gender is Gender.FEMALE
        assert user.created_at is not None

    def test_get_missing(self, session):
        assert UserRepository(session).get(1) is None

    def test_get_by_email_is_case_insensitive(self, session, insert_users):
        (row,) = insert_users({"email": "mixed@example.com"})
        repo = UserRepository(session)

        assert repo.get_by_email("MIXED@Example.com").id == row.id
        assert repo.get_by_email("mixed@example.com", exclude_id=row.id) is None

    def test_update_and_delete(self, session, insert_users):
        (row,) = insert_users({})
        repo = UserRepository(session)

        updated = repo.update(row.id, {"phone": "555-999-0000"})
        assert updated.phone == "555-999-0000"
        assert repo.update(999, {"phone": "x"}) is None

        assert repo.delete(row.id) is True
        assert repo.delete(row.id) is False

    def test_list_and_count_share_predicate(self, session, insert_users):
        insert_users(
            {"gender": "MALE", "last_name": "Smith"},
            {"gender": "FEMALE", "last_name": "Smithers"},
            {"gender": "MALE", "last_name": "Jones"},
            {"gender": "MALE", "last_name": "Smythe"},
        )
        repo = UserRepository(session)
        predicate = build_filter(gender="male", search="smi")

        users = repo.list(predicate, resolve_sort(), PageRequest(page=1, limit=10))

        assert [u.last_name for u in users] == ["Smith"]
        assert repo.count(predicate) == 1
        assert repo.count() == 4

    def test_paging_window(self, session, insert_users):
        insert_users(*({} for _ in range(6)))
        repo = UserRepository(session)

        users = repo.list(page=PageRequest(page=2, limit=4))

        assert [u.id for u in users] == [5, 6]

    def test_aggregate_reads(self, session, insert_users):
        insert_users({"gender": "MALE"}, {"gender": "MALE"}, {"gender": "OTHER"})
        repo = UserRepository(session)

        assert dict(repo.count_by_gender()) == {"MALE": 2, "OTHER": 1}
        assert len(repo.created_at_values()) == 3
        assert all(isinstance(v, str) for v in repo.created_at_values())
        assert sorted(repo.email_values()) == [
            "user1@example.com",
            "user2@example.com",
            "user3@example.com",
        ]

    def test_ids_beyond_store_range_are_missing(self, session, insert_users):
        insert_users({})
        repo = UserRepository(session)

        assert repo.get(10**20) is None
        assert repo.update(10**20, {"phone": "555-999-0000"}) is None
        assert repo.delete(10**20) is False
        assert repo.get(0) is None

    def test_offset_beyond_store_range_is_empty(self, session, insert_users):
        insert_users({}, {})

        users = UserRepository(session).list(page=PageRequest(page=10**20, limit=5))

        assert users == []

    def test_limit_beyond_store_range_returns_everything(self, session, insert_users):
        insert_users({}, {}, {})

        users = UserRepository(session).list(page=PageRequest(page=1, limit=10**20))

        assert [u.id for u in users] == [1, 2, 3]
