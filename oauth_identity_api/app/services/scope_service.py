"""
Service layer for OAuth scopes.

Mirrors ``AuthorityService``: one transaction per operation, upsert on
modify and idempotent deletes.
"""

import logging
from typing import Any, Iterable, List, Optional

from ..core.db import ConnectionFactory, get_connection, transaction
from ..core.exceptions import NotFoundError
from ..entities import Scope
from ..mappers import scope_mapper
from ..repositories.scope_repository import ScopeRepository
from ..schemas.page import Page, PageRequest
from ..schemas.scope import ScopeRequest, ScopeResponse


logger = logging.getLogger(__name__)


class ScopeService:
    def __init__(self, connection_factory: ConnectionFactory = get_connection) -> None:
        self._connection_factory = connection_factory

    def _transaction(self, read_only: bool = False):
        return transaction(read_only=read_only, connection_factory=self._connection_factory)

    async def get_scope(self, scope_id: int) -> Optional[Scope]:
        with self._transaction(read_only=True) as conn:
            return ScopeRepository(conn).find_one(scope_id)

    async def get_response(self, scope_id: int) -> ScopeResponse:
        scope = await self.get_scope(scope_id)
        if scope is None:
            logger.warning("Scope %s not found", scope_id)
            raise NotFoundError(f"Scope[id={scope_id}] not found")
        return scope_mapper.map_entity_to_response(scope)

    async def create_scope(self, request: ScopeRequest) -> ScopeResponse:
        scope = self._save(request)
        logger.info("Scope %s created", scope.id)
        return scope_mapper.map_entity_to_response(scope)

    async def modify_scope(self, request: ScopeRequest) -> ScopeResponse:
        if request.id is None:
            logger.warning("Modify called without id; a new scope '%s' will be created", request.name)
        scope = self._save(request)
        logger.info("Scope %s modified", scope.id)
        return scope_mapper.map_entity_to_response(scope)

    def _save(self, request: ScopeRequest) -> Scope:
        scope = scope_mapper.map_request_to_entity(request)
        with self._transaction() as conn:
            return ScopeRepository(conn).save(scope)

    async def delete_scope(self, scope_id: int) -> None:
        with self._transaction() as conn:
            deleted = ScopeRepository(conn).delete(scope_id)
        if deleted:
            logger.info("Scope %s deleted", scope_id)

    async def get_scopes_by_ids(self, scope_ids: Iterable[int]) -> List[Scope]:
        with self._transaction(read_only=True) as conn:
            return ScopeRepository(conn).find_by_id_in(scope_ids)

    async def list_scopes(self, page_request: PageRequest) -> Page[Any]:
        with self._transaction(read_only=True) as conn:
            page = ScopeRepository(conn).find_all(page_request)
        return page.map(scope_mapper.map_entity_to_response)
