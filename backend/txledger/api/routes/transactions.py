"""Transactions — submitter and confirmation-watcher endpoints plus record reads.

Invariants:
    - Missing X-Account header or chain id 0 -> 202 {"recorded": false}, never an error
    - Missing response hash -> NoHashFoundError (400), checked after the account
    - Duplicate hash -> InvalidSubmissionError (400); conflicting receipt -> 409
    - Unknown record on confirm/check -> 200 with false flag (soft not-found)

Design Decisions:
    - Thin routes: all rules live in core (submission.py, ledger.py)
    - /recent registered before /{tx_hash} so it is not captured as a hash
"""

import logging

from fastapi import APIRouter, Depends, Header, status
from fastapi.responses import JSONResponse

from txledger.api.dependencies import get_ledger
from txledger.core.domain_types import Address, BlockNumber, NetworkId
from txledger.core.errors import ErrorContext, TransactionNotFoundError
from txledger.core.ledger import TransactionLedger
from txledger.core.ledger_snapshot import record_to_snapshot, transactions_to_snapshot
from txledger.core.submission import WalletContext, submit_transaction
from txledger.core.transaction_queries import confirmed_hashes, pending_hashes
from txledger.schemas.transaction import BlockCheck, ReceiptIn, TransactionSubmit

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/v1/networks/{network_id}/transactions", tags=["transactions"],
)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_transaction(
    network_id: int,
    body: TransactionSubmit,
    x_account: str | None = Header(None),
    ledger: TransactionLedger = Depends(get_ledger),
):
    """Record a transaction the active account just sent."""
    context = WalletContext(
        network_id=NetworkId(network_id),
        account=Address(x_account.strip()) if x_account else None,
    )
    tx = submit_transaction(ledger, context, body.response, body.to_payload())
    if tx is None:
        logger.info(
            "Submission not recorded: wallet context incomplete",
            extra={"network_id": network_id},
        )
        return JSONResponse(
            status_code=status.HTTP_202_ACCEPTED, content={"recorded": False},
        )
    return {"recorded": True, "transaction": record_to_snapshot(tx)}


@router.get("")
async def list_transactions(
    network_id: int, ledger: TransactionLedger = Depends(get_ledger),
):
    """All records for the network, keyed by hash."""
    return {
        "transactions": transactions_to_snapshot(
            ledger.all_transactions(NetworkId(network_id)),
        ),
    }


@router.get("/recent")
async def list_recent_transactions(
    network_id: int, ledger: TransactionLedger = Depends(get_ledger),
):
    """Records inside the recency window, newest first."""
    now = ledger.now()
    recent = ledger.recent_transactions(NetworkId(network_id), now)
    return {
        "transactions": [record_to_snapshot(tx) for tx in recent],
        "pending": pending_hashes(recent),
        "confirmed": confirmed_hashes(recent),
    }


@router.get("/{tx_hash}")
async def get_transaction(
    network_id: int, tx_hash: str, ledger: TransactionLedger = Depends(get_ledger),
):
    tx = ledger.get(NetworkId(network_id), tx_hash)
    if tx is None:
        raise TransactionNotFoundError(
            network_id, tx_hash,
            ErrorContext(network_id=network_id, tx_hash=tx_hash),
        )
    return record_to_snapshot(tx)


@router.get("/{tx_hash}/pending")
async def get_transaction_pending(
    network_id: int, tx_hash: str, ledger: TransactionLedger = Depends(get_ledger),
):
    return {"pending": ledger.is_pending(NetworkId(network_id), tx_hash)}


@router.post("/{tx_hash}/receipt")
async def confirm_transaction(
    network_id: int,
    tx_hash: str,
    body: ReceiptIn,
    ledger: TransactionLedger = Depends(get_ledger),
):
    """Watcher callback: a receipt for tx_hash was found."""
    confirmed = ledger.mark_confirmed(
        NetworkId(network_id), tx_hash, body.to_receipt(),
    )
    return {"confirmed": confirmed}


@router.post("/{tx_hash}/checked")
async def check_transaction(
    network_id: int,
    tx_hash: str,
    body: BlockCheck,
    ledger: TransactionLedger = Depends(get_ledger),
):
    """Watcher callback: tx_hash was looked up at block_number."""
    updated = ledger.mark_checked(
        NetworkId(network_id), tx_hash, BlockNumber(body.block_number),
    )
    return {"updated": updated}
