"""Services Layer — server API objects and the SQL-backed managers they call.

Invariants:
    - Server APIs depend on core/ protocols, never on concrete managers
    - Managers open one database session per operation

Design Decisions:
    - All managers built once at startup (smp_managers.py) and shared by requests
"""
