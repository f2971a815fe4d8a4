"""Pydantic Schemas — request validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (request bodies)
    - Wire format is camelCase via Field aliases

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence (ADR: DDD boundary)
"""
