"""Core Layer — pure domain logic, no IO, no async, no web framework.

Invariants:
    - No module in core/ imports from api/, schemas/, or infrastructure/
    - Query functions are pure and deterministic given now_ms

Design Decisions:
    - Functional core separated from imperative shell
"""
