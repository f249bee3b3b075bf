"""Ledger Queries — derived read-only questions for UI consumers.

Invariants:
    - Every endpoint recomputes from the ledger at request time; nothing cached here
    - now is taken from the ledger clock once per request
    - Missing query params fall through to the core's "no match" answers, not 400s
"""

from fastapi import APIRouter, Depends, Query

from txledger.api.dependencies import get_ledger
from txledger.core.domain_types import Address, NetworkId
from txledger.core.ledger import TransactionLedger
from txledger.core.ledger_snapshot import (
    claim_submission_to_snapshot, verification_status_to_snapshot,
)

router = APIRouter(prefix="/api/v1/networks/{network_id}", tags=["queries"])


@router.get("/approvals/pending")
async def get_pending_approval(
    network_id: int,
    token_address: str | None = Query(None),
    spender: str | None = Query(None),
    ledger: TransactionLedger = Depends(get_ledger),
):
    """Whether an allowance for (token_address, spender) is still in flight."""
    pending = ledger.has_pending_approval(
        NetworkId(network_id), token_address, spender, ledger.now(),
    )
    return {"pending": pending}


@router.get("/claims/{recipient}")
async def get_claim_submission(
    network_id: int, recipient: str, ledger: TransactionLedger = Depends(get_ledger),
):
    result = ledger.find_claim_submission(NetworkId(network_id), recipient)
    return claim_submission_to_snapshot(result)


@router.get("/verification")
async def get_verification_status(
    network_id: int,
    account: str | None = Query(None),
    username: str | None = Query(None),
    ledger: TransactionLedger = Depends(get_ledger),
):
    result = ledger.verification_status(
        NetworkId(network_id),
        Address(account) if account else None,
        username,
        ledger.now(),
    )
    return verification_status_to_snapshot(result)


@router.get("/verification/pending-username")
async def get_pending_username(
    network_id: int,
    account: str | None = Query(None),
    username: str | None = Query(None),
    ledger: TransactionLedger = Depends(get_ledger),
):
    profile = ledger.pending_username(
        NetworkId(network_id),
        Address(account) if account else None,
        username,
        ledger.now(),
    )
    return {"pending_profile": profile}
