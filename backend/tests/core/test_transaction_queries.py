"""Transaction Queries — pure tests over hand-built snapshots.

Tests cover:
    - Recency window boundary (strict <)
    - Newest-first ordering and tie stability
    - is_transaction_pending for missing / pending / confirmed hashes
    - has_pending_approval matching, confirmation and staleness
    - find_claim_submission match and miss
    - verification_status / pending_username filtering
"""

from txledger.core.domain_types import EpochMillis, TxHash
from txledger.core.transaction_queries import (
    find_claim_submission,
    has_pending_approval,
    is_transaction_pending,
    is_transaction_recent,
    pending_username,
    sorted_recent_transactions,
    verification_status,
)
from txledger.core.transaction_record import (
    ApprovalInfo, ClaimInfo, CustomData, SocialInfo, TransactionRecord,
)
from tests.ledger_helpers import (
    ALICE, BOB, DAY_MS, MAINNET, SPENDER, TOKEN, make_receipt,
)


def _tx(tx_hash: str, added_time: int = 0, confirmed: bool = False, **payload) -> TransactionRecord:
    tx = TransactionRecord(
        hash=TxHash(tx_hash),
        network_id=MAINNET,
        submitter=ALICE,
        added_time=EpochMillis(added_time),
        payload=CustomData(**payload),
    )
    if confirmed:
        tx = tx.with_receipt(make_receipt(tx_hash), EpochMillis(added_time + 1))
    return tx


def _txs(*records: TransactionRecord) -> dict[str, TransactionRecord]:
    return {tx.hash: tx for tx in records}


# --- Recency -------------------------------------------------------------------

def test_recent_just_inside_window():
    assert is_transaction_recent(_tx("0xA", 0), DAY_MS - 1)


def test_not_recent_at_exact_window_boundary():
    assert not is_transaction_recent(_tx("0xA", 0), DAY_MS)


def test_custom_window():
    assert is_transaction_recent(_tx("0xA", 0), 999, window_ms=1_000)
    assert not is_transaction_recent(_tx("0xA", 0), 1_000, window_ms=1_000)


def test_sorted_recent_is_newest_first_and_drops_stale():
    txs = _txs(_tx("0xOld", 0), _tx("0xMid", 5_000), _tx("0xNew", 9_000))
    now = DAY_MS + 1_000  # 0xOld is more than a day old
    result = sorted_recent_transactions(txs, now)
    assert [tx.hash for tx in result] == ["0xNew", "0xMid"]


def test_sorted_recent_ties_keep_mapping_order():
    txs = _txs(_tx("0x1", 100), _tx("0x2", 100), _tx("0x3", 100))
    first = [tx.hash for tx in sorted_recent_transactions(txs, 200)]
    second = [tx.hash for tx in sorted_recent_transactions(txs, 200)]
    assert first == ["0x1", "0x2", "0x3"]
    assert first == second


# --- Pending -------------------------------------------------------------------

def test_is_pending_false_for_unknown_hash():
    assert not is_transaction_pending({}, "0xNope")


def test_is_pending_false_for_empty_hash():
    assert not is_transaction_pending(_txs(_tx("0xA")), "")
    assert not is_transaction_pending(_txs(_tx("0xA")), None)


def test_is_pending_true_then_false_after_receipt():
    assert is_transaction_pending(_txs(_tx("0xA")), "0xA")
    assert not is_transaction_pending(_txs(_tx("0xA", confirmed=True)), "0xA")


# --- Approval ------------------------------------------------------------------

def test_pending_approval_true_when_one_confirmed_and_one_pending():
    approval = ApprovalInfo(TOKEN, SPENDER)
    txs = _txs(
        _tx("0xDone", 0, confirmed=True, approval=approval),
        _tx("0xLive", 10, approval=approval),
    )
    assert has_pending_approval(txs, TOKEN, SPENDER, 1_000)


def test_pending_approval_false_when_only_pending_is_stale():
    approval = ApprovalInfo(TOKEN, SPENDER)
    txs = _txs(
        _tx("0xDone", 0, confirmed=True, approval=approval),
        _tx("0xStale", 0, approval=approval),
    )
    assert not has_pending_approval(txs, TOKEN, SPENDER, DAY_MS)


def test_pending_approval_requires_matching_spender_and_token():
    txs = _txs(_tx("0xA", 0, approval=ApprovalInfo(TOKEN, SPENDER)))
    assert not has_pending_approval(txs, TOKEN, BOB, 1)
    assert not has_pending_approval(txs, BOB, SPENDER, 1)


def test_pending_approval_ignores_records_without_approval():
    txs = _txs(_tx("0xA", 0, summary="swap"))
    assert not has_pending_approval(txs, TOKEN, SPENDER, 1)


def test_pending_approval_false_for_missing_inputs():
    txs = _txs(_tx("0xA", 0, approval=ApprovalInfo(TOKEN, SPENDER)))
    assert not has_pending_approval(txs, None, SPENDER, 1)
    assert not has_pending_approval(txs, TOKEN, None, 1)


# --- Claim ---------------------------------------------------------------------

def test_claim_not_submitted():
    result = find_claim_submission(_txs(_tx("0xA")), ALICE)
    assert result.claim_submitted is False
    assert result.claim_txn is None


def test_claim_submitted_returns_record():
    claim_tx = _tx("0xC", 5, claim=ClaimInfo(ALICE))
    txs = _txs(_tx("0xA"), claim_tx, _tx("0xD", claim=ClaimInfo(BOB)))
    result = find_claim_submission(txs, ALICE)
    assert result.claim_submitted is True
    assert result.claim_txn == claim_tx


def test_claim_returns_first_in_mapping_order():
    txs = _txs(_tx("0xFirst", 9, claim=ClaimInfo(ALICE)), _tx("0xSecond", 1, claim=ClaimInfo(ALICE)))
    assert find_claim_submission(txs, ALICE).claim_txn.hash == "0xFirst"


# --- Social verification -------------------------------------------------------

def test_verification_pending_only_is_not_confirmed():
    txs = _txs(_tx("0xB", 0, social=SocialInfo("alice", ALICE)))
    result = verification_status(txs, ALICE, "alice", 1)
    assert result.any_pending_verification is True
    assert result.confirmed is False
    assert result.verification_confirmed is False
    assert result.pending_txn.hash == "0xB"


def test_verification_confirmed_while_another_is_pending():
    txs = _txs(
        _tx("0xOk", 0, confirmed=True, social=SocialInfo("alice", ALICE)),
        _tx("0xRetry", 10, social=SocialInfo("alice", ALICE)),
    )
    result = verification_status(txs, ALICE, "alice", 100)
    assert result.verification_confirmed is True
    assert result.verified_txn.hash == "0xOk"


def test_any_pending_ignores_identity():
    txs = _txs(
        _tx("0xOk", 0, confirmed=True, social=SocialInfo("alice", ALICE)),
        _tx("0xOther", 10, social=SocialInfo("bob", BOB)),
    )
    result = verification_status(txs, ALICE, "alice", 100)
    assert result.any_pending_verification is True
    assert result.verification_confirmed is True
    assert result.pending_txn.hash == "0xOther"


def test_confirmed_without_pending_needs_observed_latch():
    tx = _tx("0xB", 0, social=SocialInfo("alice", ALICE))
    txs = _txs(tx.with_receipt(make_receipt("0xB"), EpochMillis(5)))

    assert verification_status(txs, ALICE, "alice", 10).verification_confirmed is False
    latched = verification_status(txs, ALICE, "alice", 10, observed_pending=tx)
    assert latched.verification_confirmed is True
    assert latched.any_pending_verification is False
    assert latched.pending_txn is None
    assert latched.observed_pending == tx


def test_verification_ignores_stale_records():
    txs = _txs(
        _tx("0xOld", 0, confirmed=True, social=SocialInfo("alice", ALICE)),
        _tx("0xNew", DAY_MS, social=SocialInfo("alice", ALICE)),
    )
    result = verification_status(txs, ALICE, "alice", DAY_MS + 1)
    assert result.confirmed is False


def test_pending_username_returns_newest_relevant_pending():
    txs = _txs(
        _tx("0xA", 0, social=SocialInfo("alice", ALICE)),
        _tx("0xB", 10, social=SocialInfo("alice", ALICE)),
    )
    assert pending_username(txs, ALICE, "alice", 20) == "alice"


def test_pending_username_none_when_confirmed_or_other_identity():
    txs = _txs(
        _tx("0xA", 0, confirmed=True, social=SocialInfo("alice", ALICE)),
        _tx("0xB", 10, social=SocialInfo("bob", BOB)),
    )
    assert pending_username(txs, ALICE, "alice", 20) is None
