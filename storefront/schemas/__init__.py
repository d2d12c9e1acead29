"""Pydantic Schemas: request validation at the HTTP boundary.

Invariants:
    - Schemas validate types; stores enforce required fields and uniqueness
"""
