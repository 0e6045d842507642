"""
Service layer for authority management.

Authorities are the roles and permissions that can be granted to users.
Every public operation runs inside one transaction: writes commit or
roll back as a unit, reads use a read-only transaction.  Creation and
modification share the same map-and-save path, so modifying a request
without an ``id`` creates a new authority; this is logged as a warning
rather than rejected.
"""

import logging
from typing import Any, Iterable, List, Optional

from ..core.db import ConnectionFactory, get_connection, transaction
from ..core.exceptions import NotFoundError
from ..entities import Authority
from ..mappers import authority_mapper
from ..repositories.authority_repository import AuthorityRepository
from ..schemas.authority import AuthorityRequest, AuthorityResponse
from ..schemas.page import Page, PageRequest


logger = logging.getLogger(__name__)


class AuthorityService:
    """Service for creating, reading, modifying and deleting authorities."""

    def __init__(self, connection_factory: ConnectionFactory = get_connection) -> None:
        self._connection_factory = connection_factory

    def _transaction(self, read_only: bool = False):
        return transaction(read_only=read_only, connection_factory=self._connection_factory)

    async def get_authority(self, authority_id: int) -> Optional[Authority]:
        """Return the authority or ``None`` when it does not exist."""
        with self._transaction(read_only=True) as conn:
            return AuthorityRepository(conn).find_one(authority_id)

    async def get_response(self, authority_id: int) -> AuthorityResponse:
        authority = await self.get_authority(authority_id)
        if authority is None:
            logger.warning("Authority %s not found", authority_id)
            raise NotFoundError(f"Authority[id={authority_id}] not found")
        return authority_mapper.map_entity_to_response(authority)

    async def create_authority(self, request: AuthorityRequest) -> AuthorityResponse:
        authority = self._save(request)
        logger.info("Authority %s created", authority.id)
        return authority_mapper.map_entity_to_response(authority)

    async def modify_authority(self, request: AuthorityRequest) -> AuthorityResponse:
        """Overwrite the authority identified by ``request.id``.

        The store upserts by id, so an unknown id is created with that id
        and a missing id creates a new record.
        """
        if request.id is None:
            logger.warning("Modify called without id; a new authority '%s' will be created", request.name)
        authority = self._save(request)
        logger.info("Authority %s modified", authority.id)
        return authority_mapper.map_entity_to_response(authority)

    def _save(self, request: AuthorityRequest) -> Authority:
        authority = authority_mapper.map_request_to_entity(request)
        with self._transaction() as conn:
            return AuthorityRepository(conn).save(authority)

    async def delete_authority(self, authority_id: int) -> None:
        """Delete an authority.  Deleting an unknown id is a no-op."""
        with self._transaction() as conn:
            deleted = AuthorityRepository(conn).delete(authority_id)
        if deleted:
            logger.info("Authority %s deleted", authority_id)
        else:
            logger.info("Authority %s did not exist; nothing deleted", authority_id)

    async def get_authorities_by_ids(self, authority_ids: Iterable[int]) -> List[Authority]:
        """Return the authorities found among ``authority_ids``; unknown ids are skipped."""
        with self._transaction(read_only=True) as conn:
            return AuthorityRepository(conn).find_by_id_in(authority_ids)

    async def list_authorities(self, page_request: PageRequest) -> Page[Any]:
        with self._transaction(read_only=True) as conn:
            page = AuthorityRepository(conn).find_all(page_request)
        return page.map(authority_mapper.map_entity_to_response)
