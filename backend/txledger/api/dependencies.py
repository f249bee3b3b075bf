"""API Dependencies — hands the app's single TransactionLedger to route handlers.

Invariants:
    - The ledger lives on app.state, created once in the lifespan
    - Routes receive it only through Depends(get_ledger); tests override it
"""

from fastapi import Request

from txledger.core.ledger import TransactionLedger


def get_ledger(request: Request) -> TransactionLedger:
    return request.app.state.ledger
