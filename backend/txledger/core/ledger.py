"""Transaction Ledger — per-network store of submitted transactions and their receipts.

Invariants:
    - Records are keyed by network_id, then by hash; a hash appears once per network
    - record() is a no-op when network_id or submitter is unset
    - receipt is set once; the same receipt again is harmless, a different one raises
    - Records are never deleted; staleness is decided at query time
    - Every read copies the network's dict once, so a caller sees one consistent snapshot

Design Decisions:
    - Explicitly owned object, constructed at app start and injected into
      routes (not a module-level dict), so tests build their own
    - Confirmation swaps in a new frozen record instead of mutating in place
    - Unknown confirmations are soft: logged and reported as False, since a
      receipt can race the record it belongs to
    - clock is injectable: milliseconds since epoch
    - verification_status remembers observed pending verifications in a
      VerificationTracker; records themselves are untouched by reads
"""

import logging
import time
from collections.abc import Callable

from txledger.core.domain_types import (
    Address, BlockNumber, EpochMillis, NetworkId, RECENCY_WINDOW_MS, TxHash,
)
from txledger.core.errors import (
    AlreadyConfirmedError, ErrorContext, InvalidSubmissionError,
)
from txledger.core.transaction_queries import (
    ClaimSubmission,
    VerificationStatus,
    confirmed_hashes,
    find_claim_submission,
    has_pending_approval,
    is_transaction_pending,
    pending_hashes,
    pending_username,
    sorted_recent_transactions,
)
from txledger.core.transaction_record import (
    CustomData, TransactionReceipt, TransactionRecord,
)
from txledger.core.verification_tracker import VerificationTracker

logger = logging.getLogger(__name__)


def current_time_ms() -> EpochMillis:
    return EpochMillis(int(time.time() * 1000))


class TransactionLedger:
    """Sole owner of all transaction records."""

    def __init__(
        self,
        recency_window_ms: int = RECENCY_WINDOW_MS,
        clock: Callable[[], int] = current_time_ms,
    ) -> None:
        self.recency_window_ms = recency_window_ms
        self._clock = clock
        self._transactions: dict[NetworkId, dict[str, TransactionRecord]] = {}
        self._verifications = VerificationTracker()

    def now(self) -> EpochMillis:
        return EpochMillis(self._clock())

    @property
    def network_ids(self) -> list[NetworkId]:
        return list(self._transactions)

    # --- Mutations -------------------------------------------------------------

    def record(
        self,
        tx_hash: str,
        network_id: NetworkId | None,
        submitter: Address | None,
        payload: CustomData | None = None,
    ) -> TransactionRecord | None:
        """Insert a pending record. Returns None when there is no scope to store it."""
        if not network_id or not submitter:
            logger.debug(
                "Submission dropped: no active network or account",
                extra={"network_id": network_id, "tx_hash": tx_hash},
            )
            return None

        context = ErrorContext(network_id=network_id, tx_hash=tx_hash or None)
        if not tx_hash:
            raise InvalidSubmissionError("transaction hash is empty", context)

        network = self._transactions.setdefault(network_id, {})
        if tx_hash in network:
            raise InvalidSubmissionError(
                f"transaction '{tx_hash}' already recorded", context,
            )

        tx = TransactionRecord(
            hash=TxHash(tx_hash),
            network_id=network_id,
            submitter=submitter,
            added_time=self.now(),
            payload=payload or CustomData(),
        )
        network[tx_hash] = tx
        logger.info(
            f"Recorded transaction {tx_hash}",
            extra={
                "network_id": network_id, "tx_hash": tx_hash,
                "submitter": submitter,
            },
        )
        return tx

    def mark_confirmed(
        self, network_id: NetworkId, tx_hash: str, receipt: TransactionReceipt,
    ) -> bool:
        """Attach receipt. False when no such record exists (soft not-found)."""
        network = self._transactions.get(network_id, {})
        tx = network.get(tx_hash)
        if tx is None:
            logger.warning(
                f"Confirmation for unknown transaction {tx_hash} dropped",
                extra={
                    "network_id": network_id, "tx_hash": tx_hash,
                    "error_code": "TRANSACTION_NOT_FOUND",
                },
            )
            return False

        if tx.receipt is not None:
            if tx.receipt == receipt:
                return True
            raise AlreadyConfirmedError(
                tx_hash, ErrorContext(network_id=network_id, tx_hash=tx_hash),
            )

        network[tx_hash] = tx.with_receipt(receipt, self.now())
        logger.info(
            f"Confirmed transaction {tx_hash}",
            extra={"network_id": network_id, "tx_hash": tx_hash},
        )
        return True

    def mark_checked(
        self, network_id: NetworkId, tx_hash: str, block_number: BlockNumber,
    ) -> bool:
        """Record the highest block the watcher checked. False when unknown."""
        network = self._transactions.get(network_id, {})
        tx = network.get(tx_hash)
        if tx is None:
            logger.warning(
                f"Block check for unknown transaction {tx_hash} dropped",
                extra={
                    "network_id": network_id, "tx_hash": tx_hash,
                    "error_code": "TRANSACTION_NOT_FOUND",
                },
            )
            return False
        network[tx_hash] = tx.with_checked_block(block_number)
        return True

    # --- Reads -----------------------------------------------------------------

    def all_transactions(self, network_id: NetworkId | None) -> dict[str, TransactionRecord]:
        """Copy of hash -> record for network_id; empty when unknown."""
        if network_id is None:
            return {}
        return dict(self._transactions.get(network_id, {}))

    def get(self, network_id: NetworkId, tx_hash: str) -> TransactionRecord | None:
        return self._transactions.get(network_id, {}).get(tx_hash)

    def is_pending(self, network_id: NetworkId, tx_hash: str | None) -> bool:
        return is_transaction_pending(self.all_transactions(network_id), tx_hash)

    def recent_transactions(
        self, network_id: NetworkId, now_ms: int | None = None,
    ) -> list[TransactionRecord]:
        return sorted_recent_transactions(
            self.all_transactions(network_id), self._at(now_ms),
            self.recency_window_ms,
        )

    def pending_transaction_hashes(
        self, network_id: NetworkId, now_ms: int | None = None,
    ) -> list[TxHash]:
        return pending_hashes(self.recent_transactions(network_id, now_ms))

    def confirmed_transaction_hashes(
        self, network_id: NetworkId, now_ms: int | None = None,
    ) -> list[TxHash]:
        return confirmed_hashes(self.recent_transactions(network_id, now_ms))

    def has_pending_approval(
        self,
        network_id: NetworkId,
        token_address: str | None,
        spender: str | None,
        now_ms: int | None = None,
    ) -> bool:
        return has_pending_approval(
            self.all_transactions(network_id), token_address, spender,
            self._at(now_ms), self.recency_window_ms,
        )

    def find_claim_submission(
        self, network_id: NetworkId, recipient: str | None,
    ) -> ClaimSubmission:
        return find_claim_submission(self.all_transactions(network_id), recipient)

    def verification_status(
        self,
        network_id: NetworkId,
        account: Address | None,
        username: str | None,
        now_ms: int | None = None,
    ) -> VerificationStatus:
        return self._verifications.status(
            self.all_transactions(network_id), network_id, account, username,
            self._at(now_ms), self.recency_window_ms,
        )

    def pending_username(
        self,
        network_id: NetworkId,
        account: Address | None,
        username: str | None,
        now_ms: int | None = None,
    ) -> str | None:
        return pending_username(
            self.all_transactions(network_id), account, username,
            self._at(now_ms), self.recency_window_ms,
        )

    def _at(self, now_ms: int | None) -> int:
        return self.now() if now_ms is None else now_ms
