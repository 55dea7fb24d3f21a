"""
User service layer - validation and redaction around the user store
"""

from typing import Any, Mapping, Optional, Sequence, Type, TypeVar, Union

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError

from ..exceptions import DuplicateEmailError, UserNotFoundError
from ..filters import parse_order
from ..models import EMAIL_CONSTRAINT, PRIVATE_FIELDS, User
from ..repositories import UserRepository
from ..schemas import QueryOptions, UserCreate, UserPage, UserPublic, UserUpdate
from ..security import hash_password
from .base import BaseService

S = TypeVar("S", bound=BaseModel)


def _coerce(schema: Type[S], value: Union[S, Mapping[str, Any], None]) -> S:
    if isinstance(value, schema):
        return value
    return schema.model_validate(dict(value or {}))


def _is_email_conflict(exc: IntegrityError) -> bool:
    # SQLite reports the column "users.email", PostgreSQL the constraint name.
    message = str(exc.orig).lower()
    return "users.email" in message or EMAIL_CONSTRAINT in message


class UserService(BaseService):
    """User service.

    Email uniqueness is checked before every write and additionally enforced by
    the ``uq_users_email`` constraint: when two concurrent writers both pass the
    check, the loser's constraint violation is reported as ``DuplicateEmailError``.
    """

    async def create_user(self, user_body: Union[UserCreate, Mapping[str, Any]]) -> UserPublic:
        """Create a user"""
        data = _coerce(UserCreate, user_body)
        self._logger.info("Creating user: %s", data.email)

        try:
            async with self.db.get_session() as session:
                repo = UserRepository(session)
                if await repo.email_taken(data.email):
                    self._logger.warning("Attempt to create user with taken email: %s", data.email)
                    raise DuplicateEmailError(data.email)

                values = data.model_dump()
                values["password"] = hash_password(data.password)
                user = await repo.create(**values)
                created = UserPublic.from_orm_user(user)
        except IntegrityError as exc:
            if not _is_email_conflict(exc):
                raise
            self._logger.warning("Concurrent create lost the race for email: %s", data.email)
            raise DuplicateEmailError(data.email) from exc

        self._logger.info("User created: %s (ID: %s)", created.email, created.id)
        return created

    async def query_users(
        self,
        filter: Optional[Mapping[str, Any]] = None,
        options: Union[QueryOptions, Mapping[str, Any], None] = None,
        filter_expressions: Optional[Sequence[Any]] = None,
    ) -> UserPage:
        """Query for users

        Args:
            filter: Column/value pairs matched with ``=`` (``IN`` for collections, ``IS NULL`` for None).
                A value may also be a comparison such as ``User.id > 1`` or an operator
                mapping such as ``{"gt": 1, "lte": 10}``
            options: ``order`` (``field:(desc|asc)`` entries, comma separated), ``limit`` and ``offset``
            filter_expressions: Extra SQLAlchemy conditions ANDed onto ``filter``

        Returns:
            The total count of matching users and the requested page, redacted
        """
        opts = _coerce(QueryOptions, options)
        sort = parse_order(opts.order)
        self._logger.debug(
            "Querying users: filter=%s order=%s limit=%s offset=%s", filter, sort, opts.limit, opts.offset
        )

        async with self.db.get_session() as session:
            repo = UserRepository(session)
            total, rows = await repo.find_and_count_all(
                filters=dict(filter or {}),
                order_by_args=repo.order_clauses(sort),
                limit=opts.limit,
                offset=opts.offset,
                exclude=PRIVATE_FIELDS,
                filter_expressions=filter_expressions,
            )
            return UserPage(total=total, rows=[UserPublic.from_orm_user(row) for row in rows])

    async def get_user_by_id(self, user_id: Any) -> Optional[UserPublic]:
        """Get user by id, or None when absent"""
        self._logger.debug("Getting user by ID: %s", user_id)

        async with self.db.get_session() as session:
            user = await UserRepository(session).get_by_id(user_id, exclude=PRIVATE_FIELDS)
            return UserPublic.from_orm_user(user) if user is not None else None

    async def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email.

        Unlike the other read paths this returns the full record, password hash
        and timestamps included, for internal credential checks. Redact with
        ``UserPublic.from_orm_user`` before handing it to an outside caller.
        """
        self._logger.debug("Getting user by email: %s", email)

        async with self.db.get_session() as session:
            return await UserRepository(session).find_by_email(email)

    async def update_user_by_id(self, user_id: Any, update_body: Union[UserUpdate, Mapping[str, Any]]) -> UserPublic:
        """Update user by id"""
        changes = _coerce(UserUpdate, update_body).changes()
        self._logger.info("Updating user: %s (fields: %s)", user_id, sorted(changes))

        try:
            async with self.db.get_session() as session:
                repo = UserRepository(session)
                user = await repo.get_by_id(user_id, exclude=PRIVATE_FIELDS)
                if user is None:
                    self._logger.warning("User not found: %s", user_id)
                    raise UserNotFoundError(user_id)

                current = UserPublic.from_orm_user(user)
                new_email = changes.get("email")
                if new_email is not None and new_email != current.email and await repo.email_taken(new_email):
                    self._logger.warning("Attempt to change user %s to taken email: %s", user_id, new_email)
                    raise DuplicateEmailError(new_email)

                values = dict(changes)
                if "password" in values:
                    values["password"] = hash_password(values["password"])
                if values:
                    await repo.update_where(values, {"id": user_id})
        except IntegrityError as exc:
            if not _is_email_conflict(exc):
                raise
            raise DuplicateEmailError(changes.get("email")) from exc

        visible = {key: value for key, value in changes.items() if key in UserPublic.model_fields}
        self._logger.info("User updated: %s", user_id)
        return current.model_copy(update=visible)

    async def delete_user_by_id(self, user_id: Any) -> UserPublic:
        """Delete user by id; returns the redacted record that was removed"""
        self._logger.info("Deleting user: %s", user_id)

        async with self.db.get_session() as session:
            repo = UserRepository(session)
            user = await repo.get_by_id(user_id, exclude=PRIVATE_FIELDS)
            if user is None:
                self._logger.warning("User not found: %s", user_id)
                raise UserNotFoundError(user_id)

            deleted = UserPublic.from_orm_user(user)
            await repo.destroy({"id": user_id})

        self._logger.info("User deleted: %s", user_id)
        return deleted
