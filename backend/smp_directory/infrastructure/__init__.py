"""Infrastructure Layer — database sessions and logging setup.

Invariants:
    - All SQLAlchemy failures surface as DatabaseError

Design Decisions:
    - One DatabaseSessionManager per process, created in the application lifespan
"""
