"""Infrastructure Layer: external service clients and cross-cutting concerns.

Invariants:
    - Every external call is attempted exactly once (no retry, no backoff)
    - SDK / transport exceptions mapped to typed errors from core/errors.py
"""
