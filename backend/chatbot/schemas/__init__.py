"""Pydantic Schemas: validation for every externally supplied payload.

Invariants:
    - Schemas validate at system boundary (inbound frames, model replies, backend responses)
    - parse_* helpers return tagged results instead of raising
"""
