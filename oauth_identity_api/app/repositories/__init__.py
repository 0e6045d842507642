"""
Repositories: the entity store used by the services.

Each repository operates on a connection handed to it by the caller and
leaves commit/rollback to ``core.db.transaction``.
"""
