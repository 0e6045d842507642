"""Conversions between ``Scope`` and its request/response schemas."""

from typing import Optional

from ..entities import Scope
from ..schemas.scope import ScopeRequest, ScopeResponse


def map_request_to_entity(request: Optional[ScopeRequest]) -> Optional[Scope]:
    if request is None:
        return None
    return Scope(id=request.id, name=request.name, description=request.description)


def map_entity_to_response(scope: Optional[Scope]) -> Optional[ScopeResponse]:
    if scope is None:
        return None
    return ScopeResponse(id=scope.id, name=scope.name, description=scope.description)
