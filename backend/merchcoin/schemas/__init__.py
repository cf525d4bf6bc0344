"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - JSON field names follow the public API (camelCase aliases where needed)
"""
