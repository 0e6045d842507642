"""
Business logic for users.

``UserService`` owns the only real business rules of the identity
backend:

* a username is unique; creating a user whose username is taken fails
  with ``ConflictError`` before anything is written;
* updating or deleting a user requires the user to exist, otherwise
  ``NotFoundError`` is raised;
* a password is hashed before it is persisted, on create and on update.

Updating a user only replaces the password.  Other fields of the
request (username, email, enabled) are ignored on update and the stored
values are kept.

Each public operation runs in a single transaction.  The username check
and the insert are not atomic on their own; the UNIQUE constraint on
``users.username`` catches the race and ``UserRepository`` reports it as
``ConflictError`` as well.
"""

import logging
from typing import Any, Callable, Optional

from ..core.db import ConnectionFactory, get_connection, transaction
from ..core.exceptions import ConflictError, NotFoundError
from ..core.security import hash_password
from ..entities import User
from ..mappers import user_mapper
from ..repositories.user_repository import UserRepository
from ..schemas.page import Page, PageRequest
from ..schemas.user import SearchUserRequest, UserRequest, UserResponse


logger = logging.getLogger(__name__)


class UserService:
    """Service for creating, updating, reading and deleting users."""

    def __init__(
        self,
        connection_factory: ConnectionFactory = get_connection,
        password_hasher: Callable[[str], str] = hash_password,
    ) -> None:
        self._connection_factory = connection_factory
        self._password_hasher = password_hasher

    def _transaction(self, read_only: bool = False):
        return transaction(read_only=read_only, connection_factory=self._connection_factory)

    async def create_or_update(self, request: UserRequest) -> UserResponse:
        """Create a user when ``request.id`` is ``None``, otherwise update its password.

        Raises
        ------
        ConflictError
            On create, when the username already exists.
        NotFoundError
            On update, when no user has ``request.id``.
        """
        with self._transaction() as conn:
            repository = UserRepository(conn)
            if request.id is None:
                user = self._create(repository, request)
                logger.info("User %s created with id %s", user.username, user.id)
            else:
                user = self._update(repository, request)
                logger.info("Password of user %s updated", user.id)
        return user_mapper.map_entity_to_response(user)

    def _create(self, repository: UserRepository, request: UserRequest) -> User:
        if repository.find_by_username(request.username) is not None:
            logger.warning("Username %s already taken", request.username)
            raise ConflictError(f"User[username={request.username}] already exists")
        user = user_mapper.map_request_to_entity(request)
        user.password = self._password_hasher(request.password)
        return repository.save(user)

    def _update(self, repository: UserRepository, request: UserRequest) -> User:
        user = repository.find_one(request.id)
        if user is None:
            logger.warning("User %s not found for update", request.id)
            raise NotFoundError(f"User[id={request.id}] not found")
        user.password = self._password_hasher(request.password)
        return repository.save(user)

    async def get_all(
        self,
        search: Optional[SearchUserRequest] = None,
        page_request: Optional[PageRequest] = None,
    ) -> Page[Any]:
        """Return one page of users matching ``search``."""
        page_request = page_request or PageRequest()
        with self._transaction(read_only=True) as conn:
            page = UserRepository(conn).find_all(page_request, search)
        return page.map(user_mapper.map_entity_to_response)

    async def get_entity(self, user_id: int) -> Optional[User]:
        with self._transaction(read_only=True) as conn:
            return UserRepository(conn).find_one(user_id)

    async def get_entity_by_username(self, username: str) -> Optional[User]:
        with self._transaction(read_only=True) as conn:
            return UserRepository(conn).find_by_username(username)

    async def get_response(self, user_id: int) -> UserResponse:
        user = await self.get_entity(user_id)
        if user is None:
            raise NotFoundError(f"User[id={user_id}] not found")
        return user_mapper.map_entity_to_response(user)

    async def get_response_by_username(self, username: str) -> UserResponse:
        user = await self.get_entity_by_username(username)
        if user is None:
            raise NotFoundError(f"User[username={username}] not found")
        return user_mapper.map_entity_to_response(user)

    async def delete(self, user_id: int) -> None:
        """Delete a user, raising ``NotFoundError`` when it does not exist."""
        with self._transaction() as conn:
            repository = UserRepository(conn)
            user = repository.find_one(user_id)
            if user is None:
                logger.warning("User %s not found for delete", user_id)
                raise NotFoundError(f"User[id={user_id}] not found")
            repository.delete_entity(user)
        logger.info("User %s deleted", user_id)
