"""Services Layer: analyzer, context resolver, composer and the conversation orchestrator.

Invariants:
    - Components return StepResult values; only the orchestrator decides on fallbacks
"""
