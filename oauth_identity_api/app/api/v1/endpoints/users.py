"""
User endpoints for API v1.

A single ``POST /`` handles both registration (no ``id`` in the body)
and password updates (``id`` present), matching
``UserService.create_or_update``.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from oauth_identity_api.app.core.exceptions import ConflictError, NotFoundError
from oauth_identity_api.app.core.security import require_admin
from oauth_identity_api.app.schemas.page import Page, PageRequest
from oauth_identity_api.app.schemas.user import SearchUserRequest, UserRequest, UserResponse
from oauth_identity_api.app.services.user_service import UserService


router = APIRouter(dependencies=[Depends(require_admin)])


def get_user_service() -> UserService:
    return UserService()


@router.get("/", response_model=Page[UserResponse])
async def list_users(
    username: Optional[str] = Query(None, description="Substring of the username"),
    email: Optional[str] = Query(None),
    enabled: Optional[bool] = Query(None),
    page: int = Query(0, ge=0),
    size: Optional[int] = Query(None, ge=1),
    sort: str = Query("id"),
    direction: str = Query("asc"),
    service: UserService = Depends(get_user_service),
):
    """List users page by page, optionally filtered."""
    search = SearchUserRequest(username=username, email=email, enabled=enabled)
    page_request = PageRequest(page=page, size=size, sort=sort, direction=direction)
    return await service.get_all(search, page_request)


@router.post("/", response_model=UserResponse)
async def save_user(
    body: UserRequest,
    response: Response,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Create a user, or change the password of user ``body.id``.

    Returns 201 on creation, 200 on update, 409 when the username is
    taken and 404 when the user to update does not exist.
    """
    try:
        user = await service.create_or_update(body)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if body.id is None:
        response.status_code = status.HTTP_201_CREATED
    return user


@router.get("/by-username/{username}", response_model=UserResponse)
async def get_user_by_username(username: str, service: UserService = Depends(get_user_service)) -> UserResponse:
    try:
        return await service.get_response_by_username(username)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, service: UserService = Depends(get_user_service)) -> UserResponse:
    try:
        return await service.get_response(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: int, service: UserService = Depends(get_user_service)) -> None:
    try:
        await service.delete(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
