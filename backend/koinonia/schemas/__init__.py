"""Pydantic Schemas — request validation for API endpoints.

Invariants:
    - Schemas validate at system boundary, before any store access
    - Validation failures surface as 400 VALIDATION_ERROR (api/error_handlers.py)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
