"""Persistence for OAuth scopes."""

from ..entities import Scope
from .base import NamedEntityRepository


class ScopeRepository(NamedEntityRepository[Scope]):
    table = "scopes"
    entity_type = Scope
