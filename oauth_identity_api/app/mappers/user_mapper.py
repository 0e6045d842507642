"""
Conversions between ``User`` and its request/response schemas.

The request password is copied verbatim; hashing is the caller's job
(see ``UserService``).  The response never includes the password.
"""

from typing import Optional

from ..entities import User
from ..schemas.user import UserRequest, UserResponse


def map_request_to_entity(request: Optional[UserRequest]) -> Optional[User]:
    if request is None:
        return None
    return User(
        id=request.id,
        username=request.username,
        password=request.password,
        email=request.email,
        enabled=request.enabled,
    )


def map_entity_to_response(user: Optional[User]) -> Optional[UserResponse]:
    if user is None:
        return None
    return UserResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        enabled=user.enabled,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )
