"""Transaction Queries — pure derived questions over one network's snapshot.

Invariants:
    - Every function takes a Mapping[hash, TransactionRecord] and returns a value; no mutation
    - Recency is strict: now_ms - added_time < window_ms
    - Newest-first ordering is stable: equal added_time keeps mapping order
    - any_pending_verification ignores account/username (kept as-is, see DESIGN.md)

Design Decisions:
    - Recompute on every call over a snapshot instead of caching derived views:
      read volume is low, and a pure function cannot go stale
    - Results with more than one field are frozen dataclasses, not dicts
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from txledger.core.domain_types import Address, RECENCY_WINDOW_MS, TxHash
from txledger.core.transaction_record import TransactionRecord

Transactions = Mapping[str, TransactionRecord]


@dataclass(frozen=True)
class ClaimSubmission:
    """Whether a claim for a recipient has been submitted, and which one."""
    claim_submitted: bool
    claim_txn: TransactionRecord | None = None


@dataclass(frozen=True)
class VerificationStatus:
    """Social verification state for one (account, username) pair."""
    verification_confirmed: bool
    any_pending_verification: bool
    confirmed: bool
    pending_txn: TransactionRecord | None = None
    verified_txn: TransactionRecord | None = None
    relevant_txn: TransactionRecord | None = None
    observed_pending: TransactionRecord | None = None


# ─── Recency & ordering ─────────────────────────────────────────

def is_transaction_recent(
    tx: TransactionRecord, now_ms: int, window_ms: int = RECENCY_WINDOW_MS,
) -> bool:
    """Whether tx was added within the window before now_ms."""
    return now_ms - tx.added_time < window_ms


def new_transactions_first(tx: TransactionRecord) -> int:
    """Sort key: newest added_time first when used with sorted()."""
    return -tx.added_time


def sorted_recent_transactions(
    transactions: Transactions, now_ms: int, window_ms: int = RECENCY_WINDOW_MS,
) -> list[TransactionRecord]:
    """Recent records, newest first. sorted() is stable, so ties keep order."""
    recent = (
        tx for tx in transactions.values()
        if is_transaction_recent(tx, now_ms, window_ms)
    )
    return sorted(recent, key=new_transactions_first)


def pending_hashes(records: Iterable[TransactionRecord]) -> list[TxHash]:
    return [tx.hash for tx in records if tx.receipt is None]


def confirmed_hashes(records: Iterable[TransactionRecord]) -> list[TxHash]:
    return [tx.hash for tx in records if tx.receipt is not None]


# ─── Point lookups ──────────────────────────────────────────────

def is_transaction_pending(transactions: Transactions, tx_hash: str | None) -> bool:
    """True iff a record exists for tx_hash and has no receipt.

    A hash that was never submitted also yields False.
    """
    if not tx_hash:
        return False
    tx = transactions.get(tx_hash)
    if tx is None:
        return False
    return tx.receipt is None


# ─── Approval ───────────────────────────────────────────────────

def has_pending_approval(
    transactions: Transactions,
    token_address: str | None,
    spender: str | None,
    now_ms: int,
    window_ms: int = RECENCY_WINDOW_MS,
) -> bool:
    """Whether an unconfirmed, recent approval exists for (token, spender)."""
    if not isinstance(token_address, str) or not isinstance(spender, str):
        return False
    for tx in transactions.values():
        if tx.receipt is not None:
            continue
        approval = tx.payload.approval
        if approval is None:
            continue
        if (
            approval.spender == spender
            and approval.token_address == token_address
            and is_transaction_recent(tx, now_ms, window_ms)
        ):
            return True
    return False


# ─── Claim ──────────────────────────────────────────────────────

def find_claim_submission(
    transactions: Transactions, recipient: str | None,
) -> ClaimSubmission:
    """First claim for recipient in mapping order, if any."""
    for tx in transactions.values():
        claim = tx.payload.claim
        if claim is not None and claim.recipient == recipient:
            return ClaimSubmission(claim_submitted=True, claim_txn=tx)
    return ClaimSubmission(claim_submitted=False)


# ─── Social verification ────────────────────────────────────────

def _relevant_social(
    records: list[TransactionRecord], account: Address | None, username: str | None,
) -> list[TransactionRecord]:
    return [
        tx for tx in records
        if tx.payload.social is not None
        and tx.payload.social.account == account
        and tx.payload.social.username == username
    ]


def verification_status(
    transactions: Transactions,
    account: Address | None,
    username: str | None,
    now_ms: int,
    window_ms: int = RECENCY_WINDOW_MS,
    observed_pending: TransactionRecord | None = None,
) -> VerificationStatus:
    """Confirmed only when a verification was in flight AND a matching one landed.

    observed_pending is a pending verification seen by an earlier call. When
    given, it stands in for "in flight" after that record has been confirmed.
    pending_txn always reflects the current snapshot.
    """
    recent = sorted_recent_transactions(transactions, now_ms, window_ms)
    relevant = _relevant_social(recent, account, username)

    pending_social = [
        tx for tx in recent if tx.receipt is None and tx.payload.social is not None
    ]
    verified = [tx for tx in relevant if tx.receipt is not None]

    pending_txn = pending_social[0] if pending_social else None
    in_flight = pending_txn is not None or observed_pending is not None
    confirmed = bool(verified)
    return VerificationStatus(
        verification_confirmed=confirmed and in_flight,
        any_pending_verification=pending_txn is not None,
        confirmed=confirmed,
        pending_txn=pending_txn,
        verified_txn=verified[0] if verified else None,
        relevant_txn=relevant[0] if relevant else None,
        observed_pending=observed_pending,
    )


def pending_username(
    transactions: Transactions,
    account: Address | None,
    username: str | None,
    now_ms: int,
    window_ms: int = RECENCY_WINDOW_MS,
) -> str | None:
    """Username of the newest relevant unconfirmed verification, if any."""
    recent = sorted_recent_transactions(transactions, now_ms, window_ms)
    for tx in _relevant_social(recent, account, username):
        if tx.receipt is None:
            return tx.payload.social.username
    return None
