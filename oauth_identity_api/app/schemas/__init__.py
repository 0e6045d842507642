"""
Pydantic schema definitions for API payloads.

Each domain (users, authorities, scopes) defines one inbound request
model and one outbound response model.  Schemas are separated from the
persisted entities to decouple API representation from persistence.
"""
