"""Persistence for authorities."""

from ..entities import Authority
from .base import NamedEntityRepository


class AuthorityRepository(NamedEntityRepository[Authority]):
    table = "authorities"
    entity_type = Authority
