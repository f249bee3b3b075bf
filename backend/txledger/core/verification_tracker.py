"""Verification Tracker — remembers which pending verification a consumer has seen.

Invariants:
    - Latches are keyed by (network_id, account, username)
    - A latch is stored only for an identity with a relevant recent social record
    - A latch whose record has left the recency window is evicted on the next call
    - Never touches ledger records; holds observation state only

Design Decisions:
    - Separate from the ledger: the "pending was observed" fact belongs to the
      reader, so verification_status can report confirmed after the pending
      record itself has landed
"""

from txledger.core.domain_types import Address, NetworkId, RECENCY_WINDOW_MS
from txledger.core.transaction_queries import (
    Transactions, VerificationStatus, is_transaction_recent, verification_status,
)
from txledger.core.transaction_record import TransactionRecord

_LatchKey = tuple[NetworkId, Address | None, str | None]


class VerificationTracker:
    """Per-identity latch of the last observed pending verification."""

    def __init__(self) -> None:
        self._observed: dict[_LatchKey, TransactionRecord] = {}

    def status(
        self,
        transactions: Transactions,
        network_id: NetworkId,
        account: Address | None,
        username: str | None,
        now_ms: int,
        window_ms: int = RECENCY_WINDOW_MS,
    ) -> VerificationStatus:
        self._evict_stale(now_ms, window_ms)
        key = (network_id, account, username)
        result = verification_status(
            transactions, account, username, now_ms, window_ms,
            observed_pending=self._observed.get(key),
        )
        if result.pending_txn is not None and result.relevant_txn is not None:
            self._observed[key] = result.pending_txn
        return result

    def _evict_stale(self, now_ms: int, window_ms: int) -> None:
        stale = [
            key for key, tx in self._observed.items()
            if not is_transaction_recent(tx, now_ms, window_ms)
        ]
        for key in stale:
            del self._observed[key]
