"""Ledger Snapshot — JSON-safe serialization of records and query results.

Invariants:
    - Output contains only dicts, lists, str, int, bool and None (no dataclasses, no Enums)
    - Absent annotations and receipts serialize as None, never as missing keys
    - Pure: reads records, never touches the ledger

Design Decisions:
    - asdict for nested frozen dataclasses keeps field names in one place
    - Separate from transaction_record.py: records are domain, snapshots are presentation
"""

from dataclasses import asdict

from txledger.core.transaction_queries import ClaimSubmission, VerificationStatus
from txledger.core.transaction_record import TransactionRecord


def record_to_snapshot(tx: TransactionRecord) -> dict:
    """Serialize one record. Pure, no IO."""
    return {
        "hash": tx.hash,
        "network_id": tx.network_id,
        "submitter": tx.submitter,
        "added_time": tx.added_time,
        "status": tx.status.value,
        "summary": tx.payload.summary,
        "approval": asdict(tx.payload.approval) if tx.payload.approval else None,
        "claim": asdict(tx.payload.claim) if tx.payload.claim else None,
        "social": asdict(tx.payload.social) if tx.payload.social else None,
        "receipt": asdict(tx.receipt) if tx.receipt else None,
        "confirmed_time": tx.confirmed_time,
        "last_checked_block_number": tx.last_checked_block_number,
    }


def transactions_to_snapshot(transactions: dict[str, TransactionRecord]) -> dict:
    return {h: record_to_snapshot(tx) for h, tx in transactions.items()}


def claim_submission_to_snapshot(result: ClaimSubmission) -> dict:
    return {
        "claim_submitted": result.claim_submitted,
        "claim_txn": (
            record_to_snapshot(result.claim_txn) if result.claim_txn else None
        ),
    }


def verification_status_to_snapshot(result: VerificationStatus) -> dict:
    return {
        "verification_confirmed": result.verification_confirmed,
        "any_pending_verification": result.any_pending_verification,
        "confirmed": result.confirmed,
        "pending_hash": result.pending_txn.hash if result.pending_txn else None,
        "verified_hash": result.verified_txn.hash if result.verified_txn else None,
        "observed_hash": (
            result.observed_pending.hash if result.observed_pending else None
        ),
    }
