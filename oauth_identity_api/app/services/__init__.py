"""
Service layer abstraction.

Each service encapsulates business logic for a domain and receives its
collaborators (connection factory, password hasher) through its
constructor, so API handlers and tests can swap them freely.
"""
