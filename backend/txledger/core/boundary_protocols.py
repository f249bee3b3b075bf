"""Boundary Protocols — contracts between the ledger core and its collaborators.

Invariants:
    - Core NEVER imports from the shell — dependency arrows point inward only
    - Collaborators are described structurally; any object with the attributes works

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
"""

from typing import Protocol

from txledger.core.domain_types import Address, NetworkId


class TransactionResponse(Protocol):
    """What a submitter gets back after sending a transaction."""
    hash: str | None


class ActiveContext(Protocol):
    """Currently connected network and account. Either may be unset."""
    network_id: NetworkId | None
    account: Address | None
