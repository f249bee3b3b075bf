"""Transaction Submission — turns a submitter's response into a ledger record.

Invariants:
    - No active account or network -> silent no-op (returns None)
    - A response without a hash raises NoHashFoundError; never retried here
    - Account/network are checked BEFORE the hash, so a disconnected wallet never raises
"""

import logging
from dataclasses import dataclass

from txledger.core.boundary_protocols import ActiveContext, TransactionResponse
from txledger.core.domain_types import Address, NetworkId
from txledger.core.errors import ErrorContext, NoHashFoundError
from txledger.core.ledger import TransactionLedger
from txledger.core.transaction_record import CustomData, TransactionRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WalletContext:
    """Concrete ActiveContext for callers that have no wallet object of their own."""
    network_id: NetworkId | None = None
    account: Address | None = None


def submit_transaction(
    ledger: TransactionLedger,
    context: ActiveContext,
    response: TransactionResponse,
    payload: CustomData | None = None,
) -> TransactionRecord | None:
    """Record a freshly sent transaction under the active network and account."""
    if not context.account or not context.network_id:
        logger.debug("Submission ignored: wallet not connected")
        return None

    tx_hash = getattr(response, "hash", None)
    if not tx_hash:
        raise NoHashFoundError(ErrorContext(network_id=context.network_id))

    return ledger.record(tx_hash, context.network_id, context.account, payload)
