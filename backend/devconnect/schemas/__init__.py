"""Pydantic Schemas: request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (request bodies, API responses)
    - Required text fields are stripped and must be non-empty

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
