"""Domain Types — rich types that replace bare primitives across the ledger.

Invariants:
    - NetworkId wraps the integer chain id — never pass a bare int in domain logic
    - TxHash and Address are opaque strings, compared exactly (no case folding)
    - RECENCY_WINDOW_MS (24h) is the single source of truth for staleness

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

NetworkId = NewType("NetworkId", int)
TxHash = NewType("TxHash", str)
Address = NewType("Address", str)


# ─── Value Types ─────────────────────────────────────────────────

EpochMillis = NewType("EpochMillis", int)
BlockNumber = NewType("BlockNumber", int)


# ─── Constants ───────────────────────────────────────────────────

# 86400 seconds * 1000 milliseconds / second
RECENCY_WINDOW_MS: int = 86_400_000


# ─── Enums ───────────────────────────────────────────────────────

class TransactionStatus(str, Enum):
    """Confirmation state — derived from receipt presence, never stored."""
    PENDING = "pending"
    CONFIRMED = "confirmed"

