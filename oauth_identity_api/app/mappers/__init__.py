"""
Stateless mappers between persisted entities and API schemas.

Every module exposes ``map_request_to_entity`` and
``map_entity_to_response``.  Both are pure functions: no validation, no
side effects, and ``None`` maps to ``None``.
"""
