"""Core Layer — domain values, identifier rules, errors and counters; no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Collaborator contracts are Protocols (repository_protocols.py)

Design Decisions:
    - Functional core separated from the persistence and HTTP shell
"""
