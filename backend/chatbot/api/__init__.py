"""API Layer: WebSocket chat route, HTTP inspection routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes never contain conversation logic (delegate to services/)
"""
