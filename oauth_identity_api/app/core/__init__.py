"""
Cross-cutting infrastructure: configuration, database access, logging,
security helpers and service error types.
"""
