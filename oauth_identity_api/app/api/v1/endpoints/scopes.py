"""
Scope management endpoints for API v1.

Same shape as the authority endpoints.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from oauth_identity_api.app.core.exceptions import NotFoundError
from oauth_identity_api.app.core.security import require_admin
from oauth_identity_api.app.mappers import scope_mapper
from oauth_identity_api.app.schemas.page import Page, PageRequest
from oauth_identity_api.app.schemas.scope import ScopeRequest, ScopeResponse
from oauth_identity_api.app.services.scope_service import ScopeService


router = APIRouter(dependencies=[Depends(require_admin)])


def get_scope_service() -> ScopeService:
    return ScopeService()


@router.get("/", response_model=Page[ScopeResponse])
async def list_scopes(
    page: int = Query(0, ge=0),
    size: Optional[int] = Query(None, ge=1),
    sort: str = Query("id"),
    direction: str = Query("asc"),
    service: ScopeService = Depends(get_scope_service),
):
    """List scopes one page at a time.

    Paging and sorting follow the same rules as the authority listing.
    """
    return await service.list_scopes(PageRequest(page=page, size=size, sort=sort, direction=direction))


@router.get("/batch", response_model=List[ScopeResponse])
async def get_scopes_by_ids(
    ids: List[int] = Query(...),
    service: ScopeService = Depends(get_scope_service),
) -> List[ScopeResponse]:
    """Return the scopes that exist among ``ids``, ordered by id."""
    scopes = await service.get_scopes_by_ids(ids)
    return [scope_mapper.map_entity_to_response(scope) for scope in scopes]


@router.post("/", response_model=ScopeResponse, status_code=status.HTTP_201_CREATED)
async def create_scope(body: ScopeRequest, service: ScopeService = Depends(get_scope_service)) -> ScopeResponse:
    """Create a new scope.

    The body must contain a ``name`` and may include a ``description``.
    """
    try:
        return await service.create_scope(body)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/{scope_id}", response_model=ScopeResponse)
async def get_scope(scope_id: int, service: ScopeService = Depends(get_scope_service)) -> ScopeResponse:
    """Fetch a single scope, or 404 when no scope has this id."""
    try:
        return await service.get_response(scope_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/{scope_id}", response_model=ScopeResponse)
async def modify_scope(
    scope_id: int,
    body: ScopeRequest,
    service: ScopeService = Depends(get_scope_service),
) -> ScopeResponse:
    """Overwrite the scope stored under ``scope_id``.

    A missing record is created with that id; an id the store cannot
    hold yields 404.
    """
    try:
        return await service.modify_scope(body.model_copy(update={"id": scope_id}))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{scope_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_scope(scope_id: int, service: ScopeService = Depends(get_scope_service)) -> None:
    """Delete a scope.  Unknown ids are ignored."""
    await service.delete_scope(scope_id)
