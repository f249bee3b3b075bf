"""VerificationTracker tests — latch of observed pending verifications.

Tests:
    - A relevant pending record is latched and survives its own confirmation
    - Latches are isolated per identity and network
    - Queries for identities with no relevant record store nothing
    - Latches are evicted once their record leaves the recency window
"""

from txledger.core.domain_types import EpochMillis, TxHash
from txledger.core.transaction_record import CustomData, SocialInfo, TransactionRecord
from txledger.core.verification_tracker import VerificationTracker
from tests.ledger_helpers import ALICE, BOB, DAY_MS, MAINNET, TESTNET, make_receipt


def _social(tx_hash: str, username: str, account, added_time: int = 0) -> TransactionRecord:
    return TransactionRecord(
        hash=TxHash(tx_hash),
        network_id=MAINNET,
        submitter=account,
        added_time=EpochMillis(added_time),
        payload=CustomData(social=SocialInfo(username, account)),
    )


def test_latches_pending_record():
    tracker = VerificationTracker()
    tx = _social("0xB", "alice", ALICE)
    tracker.status({"0xB": tx}, MAINNET, ALICE, "alice", 1)
    assert tracker._observed == {(MAINNET, ALICE, "alice"): tx}


def test_nothing_latched_without_pending():
    tracker = VerificationTracker()
    tracker.status({}, MAINNET, ALICE, "alice", 1)
    assert tracker._observed == {}


def test_latch_survives_confirmation():
    tracker = VerificationTracker()
    tx = _social("0xB", "alice", ALICE)
    tracker.status({"0xB": tx}, MAINNET, ALICE, "alice", 1)

    confirmed = tx.with_receipt(make_receipt("0xB"), EpochMillis(2))
    result = tracker.status({"0xB": confirmed}, MAINNET, ALICE, "alice", 3)
    assert result.verification_confirmed is True
    assert result.pending_txn is None
    assert result.observed_pending == tx


def test_latches_are_per_identity_and_network():
    tracker = VerificationTracker()
    tx = _social("0xB", "alice", ALICE)
    tracker.status({"0xB": tx}, MAINNET, ALICE, "alice", 1)

    confirmed = {"0xB": tx.with_receipt(make_receipt("0xB"), EpochMillis(2))}
    assert tracker.status(confirmed, TESTNET, ALICE, "alice", 3).verification_confirmed is False
    assert tracker.status(confirmed, MAINNET, ALICE, "alice", 3).verification_confirmed is True


def test_latch_moves_to_newer_pending():
    tracker = VerificationTracker()
    old = _social("0xOld", "alice", ALICE, 0)
    new = _social("0xNew", "alice", ALICE, 10)
    tracker.status({"0xOld": old}, MAINNET, ALICE, "alice", 1)
    tracker.status({"0xOld": old, "0xNew": new}, MAINNET, ALICE, "alice", 11)
    assert tracker._observed[(MAINNET, ALICE, "alice")] == new


def test_unrelated_identities_store_no_latch():
    tracker = VerificationTracker()
    txs = {"0xB": _social("0xB", "alice", ALICE)}
    for i in range(1_000):
        result = tracker.status(txs, MAINNET, BOB, f"user{i}", 1)
        assert result.any_pending_verification is True
    assert tracker._observed == {}


def test_latch_evicted_after_recency_window():
    tracker = VerificationTracker()
    tx = _social("0xB", "alice", ALICE)
    tracker.status({"0xB": tx}, MAINNET, ALICE, "alice", 1)
    confirmed = {"0xB": tx.with_receipt(make_receipt("0xB"), EpochMillis(2))}

    result = tracker.status(confirmed, MAINNET, ALICE, "alice", DAY_MS)
    assert result.verification_confirmed is False
    assert result.observed_pending is None
    assert tracker._observed == {}


def test_eviction_sweeps_other_identities():
    tracker = VerificationTracker()
    tx = _social("0xB", "alice", ALICE)
    tracker.status({"0xB": tx}, MAINNET, ALICE, "alice", 1)

    tracker.status({}, TESTNET, BOB, "bob", DAY_MS + 5)
    assert tracker._observed == {}
