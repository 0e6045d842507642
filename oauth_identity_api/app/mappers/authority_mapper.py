"""Conversions between ``Authority`` and its request/response schemas."""

from typing import Optional

from ..entities import Authority
from ..schemas.authority import AuthorityRequest, AuthorityResponse


def map_request_to_entity(request: Optional[AuthorityRequest]) -> Optional[Authority]:
    if request is None:
        return None
    return Authority(id=request.id, name=request.name, description=request.description)


def map_entity_to_response(authority: Optional[Authority]) -> Optional[AuthorityResponse]:
    if authority is None:
        return None
    return AuthorityResponse(id=authority.id, name=authority.name, description=authority.description)
