"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (request bodies, API responses)
    - Conversion to and from core/ dataclasses lives on the schema

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
