"""Transaction Record — immutable value types for one submitted transaction.

Invariants:
    - All dataclasses are frozen: payload and added_time never change after creation
    - receipt transitions absent -> present exactly once (via with_receipt)
    - last_checked_block_number never decreases (via with_checked_block)
    - Mutation helpers return NEW records; the ledger swaps them in whole

Design Decisions:
    - Frozen dataclasses over dicts: a reader holding a record can never
      observe a half-applied update
    - CustomData groups the optional annotations; absent members are None
"""

from dataclasses import dataclass, field, replace

from txledger.core.domain_types import (
    Address, BlockNumber, EpochMillis, NetworkId, TransactionStatus, TxHash,
)


@dataclass(frozen=True)
class ApprovalInfo:
    """Token spending allowance granted by the transaction."""
    token_address: Address
    spender: Address


@dataclass(frozen=True)
class ClaimInfo:
    """Claim submitted on behalf of recipient."""
    recipient: Address


@dataclass(frozen=True)
class SocialInfo:
    """Social verification linking account to an external username."""
    username: str
    account: Address


@dataclass(frozen=True)
class CustomData:
    """Optional semantic annotations attached at submission time."""
    summary: str | None = None
    approval: ApprovalInfo | None = None
    claim: ClaimInfo | None = None
    social: SocialInfo | None = None


@dataclass(frozen=True)
class TransactionReceipt:
    """Serializable confirmation payload. Compared by value."""
    transaction_hash: TxHash
    block_hash: str
    block_number: BlockNumber
    transaction_index: int
    from_address: Address
    to: Address | None = None
    contract_address: Address | None = None
    status: int | None = None


@dataclass(frozen=True)
class TransactionRecord:
    """One submitted transaction, scoped to a network."""

    hash: TxHash
    network_id: NetworkId
    submitter: Address
    added_time: EpochMillis
    payload: CustomData = field(default_factory=CustomData)
    receipt: TransactionReceipt | None = None
    confirmed_time: EpochMillis | None = None
    last_checked_block_number: BlockNumber | None = None

    @property
    def status(self) -> TransactionStatus:
        if self.receipt is None:
            return TransactionStatus.PENDING
        return TransactionStatus.CONFIRMED

    def with_receipt(
        self, receipt: TransactionReceipt, confirmed_time: EpochMillis,
    ) -> "TransactionRecord":
        """Return a confirmed copy. Caller guarantees receipt was absent."""
        return replace(self, receipt=receipt, confirmed_time=confirmed_time)

    def with_checked_block(self, block_number: BlockNumber) -> "TransactionRecord":
        """Return a copy whose checked block is the max of old and new."""
        if (
            self.last_checked_block_number is not None
            and self.last_checked_block_number >= block_number
        ):
            return self
        return replace(self, last_checked_block_number=block_number)
