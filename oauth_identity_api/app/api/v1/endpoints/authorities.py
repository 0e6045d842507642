"""
Authority management endpoints for API v1.

``PUT /{authority_id}`` overwrites the authority with the given id; the
id in the path always wins over one in the body.  Deleting an unknown
authority succeeds with 204.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from oauth_identity_api.app.core.exceptions import NotFoundError
from oauth_identity_api.app.core.security import require_admin
from oauth_identity_api.app.mappers import authority_mapper
from oauth_identity_api.app.schemas.authority import AuthorityRequest, AuthorityResponse
from oauth_identity_api.app.schemas.page import Page, PageRequest
from oauth_identity_api.app.services.authority_service import AuthorityService


router = APIRouter(dependencies=[Depends(require_admin)])


def get_authority_service() -> AuthorityService:
    return AuthorityService()


@router.get("/", response_model=Page[AuthorityResponse])
async def list_authorities(
    page: int = Query(0, ge=0),
    size: Optional[int] = Query(None, ge=1),
    sort: str = Query("id"),
    direction: str = Query("asc"),
    service: AuthorityService = Depends(get_authority_service),
):
    """List authorities one page at a time.

    Pages are 0-based.  ``size`` is clamped to the configured maximum and
    ``sort`` must name one of the authority columns.
    """
    return await service.list_authorities(PageRequest(page=page, size=size, sort=sort, direction=direction))


@router.get("/batch", response_model=List[AuthorityResponse])
async def get_authorities_by_ids(
    ids: List[int] = Query(..., description="Repeat for several ids: ?ids=1&ids=2"),
    service: AuthorityService = Depends(get_authority_service),
) -> List[AuthorityResponse]:
    """Return the authorities that exist among ``ids``.

    Unknown ids are omitted and the result is ordered by id.
    """
    authorities = await service.get_authorities_by_ids(ids)
    return [authority_mapper.map_entity_to_response(authority) for authority in authorities]


@router.post("/", response_model=AuthorityResponse, status_code=status.HTTP_201_CREATED)
async def create_authority(
    body: AuthorityRequest,
    service: AuthorityService = Depends(get_authority_service),
) -> AuthorityResponse:
    """Create a new authority.

    The body must contain a ``name`` and may include a ``description``.
    An ``id`` in the body is stored as given.
    """
    try:
        return await service.create_authority(body)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/{authority_id}", response_model=AuthorityResponse)
async def get_authority(
    authority_id: int,
    service: AuthorityService = Depends(get_authority_service),
) -> AuthorityResponse:
    """Fetch a single authority, or 404 when no authority has this id."""
    try:
        return await service.get_response(authority_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/{authority_id}", response_model=AuthorityResponse)
async def modify_authority(
    authority_id: int,
    body: AuthorityRequest,
    service: AuthorityService = Depends(get_authority_service),
) -> AuthorityResponse:
    """Overwrite the authority stored under ``authority_id``.

    A missing record is created with that id.  An id outside the range
    the store can hold yields 404.
    """
    try:
        return await service.modify_authority(body.model_copy(update={"id": authority_id}))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{authority_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_authority(
    authority_id: int,
    service: AuthorityService = Depends(get_authority_service),
) -> None:
    """Delete an authority.

    Deleting an id that does not exist is not an error.
    """
    await service.delete_authority(authority_id)
