"""Deliberation Chatbot Package: WebSocket debate partner backed by a deliberation platform.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
