from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from src.directory.core.errors import (
    EmailConflictError,
    UserNotFoundError,
    UserValidationError,
)
from src.directory.core.query.filters import build_filter
from src.directory.core.query.paging import compute_total_pages, paginate
from src.directory.core.query.sorting import resolve_sort
from src.directory.core.services.database.sequence import (
    SequenceGuardian,
    violated_columns,
)
from src.directory.core.services.user.validation import (
    normalize_user_data,
    validate_user_data,
)
from src.directory.entities.core.user import User, UserRepository
from src.directory.runtime.config.config_data import QueryConfig


@dataclass
class UserPage:
    users: list[User]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return compute_total_pages(self.total, self.limit)


class UserDirectoryService:
    """List, look up, create, update and delete user records.

    Each instance works on one request-scoped session and commits the work
    it does.
    """

    def __init__(
        self,
        db_session: Session,
        sequence_guardian: SequenceGuardian,
        query_config: QueryConfig | None = None,
    ):
        self._db_session = db_session
        self._guardian = sequence_guardian
        self._query_config = query_config or QueryConfig()
        self._user_repo = UserRepository(db_session)

    def list_users(
        self,
        page: int | str | None = None,
        limit: int | str | None = None,
        sort_by: str | None = None,
        order: str | None = None,
        gender: str | None = None,
        search: str | None = None,
    ) -> UserPage:
        """One page of users matching the filters, plus the total match count.

        Paging parameters are validated before the store is queried.
        """
        page_request = paginate(
            page,
            limit,
            default_page=self._query_config.default_page,
            default_limit=self._query_config.default_limit,
            max_limit=self._query_config.max_page_size,
        )
        predicate = build_filter(gender, search)
        sort = resolve_sort(sort_by, order)

        users = self._user_repo.list(predicate, sort, page_request)
        total = self._user_repo.count(predicate)
        return UserPage(
            users=users, total=total, page=page_request.page, limit=page_request.limit
        )

    def get_user(self, user_id: int) -> User:
        user = self._user_repo.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id, message="Could not find user")
        return user

    def create_user(self, payload: Mapping[str, Any]) -> User:
        """Validate, normalize and insert a new user.

        Raises:
            UserValidationError: a field is missing or invalid.
            EmailConflictError: the email is already taken.
        """
        errors = validate_user_data(payload)
        if errors:
            raise UserValidationError(errors)

        data = normalize_user_data(payload)
        if self._user_repo.get_by_email(data["email"]) is not None:
            raise EmailConflictError(data["email"])

        def insert() -> User:
            user_id = self._guardian.sequence.allocate(self._db_session)
            return self._user_repo.create(data, user_id=user_id)

        try:
            user = self._guardian.repair_and_retry(self._db_session, insert)
            self._db_session.commit()
        except IntegrityError as e:
            self._db_session.rollback()
            self._raise_conflict(e, data["email"])
            raise

        logger.info("Created user {}", user.id)
        return user

    def update_user(self, user_id: int, payload: Mapping[str, Any]) -> User:
        """Apply a partial update; keys absent from ``payload`` are left untouched."""
        if self._user_repo.get(user_id) is None:
            raise UserNotFoundError(user_id)

        errors = validate_user_data(payload, is_update=True)
        if errors:
            raise UserValidationError(errors)

        changes = normalize_user_data(payload)
        email = changes.get("email")
        if email and self._user_repo.get_by_email(email, exclude_id=user_id) is not None:
            raise EmailConflictError(email)

        try:
            user = self._user_repo.update(user_id, changes)
            self._db_session.commit()
        except IntegrityError as e:
            self._db_session.rollback()
            self._raise_conflict(e, email or "")
            raise

        if user is None:
            raise UserNotFoundError(user_id)
        logger.info("Updated user {} ({})", user_id, ", ".join(changes) or "no changes")
        return user

    def delete_user(self, user_id: int) -> None:
        if not self._user_repo.delete(user_id):
            raise UserNotFoundError(user_id)
        self._db_session.commit()
        logger.info("Deleted user {}", user_id)

    def _raise_conflict(self, error: IntegrityError, email: str) -> None:
        # A concurrent writer may claim the email between the check and the insert.
        if "email" in violated_columns(error, self._guardian.table_name):
            raise EmailConflictError(email) from error
