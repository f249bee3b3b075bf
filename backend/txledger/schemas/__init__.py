"""Pydantic Schemas — request validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (submitter and watcher input)
    - Schemas convert into core dataclasses; responses are built from core snapshots
"""
