"""Transaction Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - Addresses and hashes are stripped; blank strings become None or fail validation
    - to_payload()/to_receipt() are the only bridges from schemas to core types
    - response.hash may be missing: the route maps that to NoHashFoundError, not 422

Design Decisions:
    - Schemas convert to frozen core dataclasses so core never sees pydantic
    - field_validator for side-effect-free transforms (strip) — keeps models pure
"""

from pydantic import BaseModel, Field, field_validator

from txledger.core.domain_types import Address, BlockNumber, TxHash
from txledger.core.transaction_record import (
    ApprovalInfo, ClaimInfo, CustomData, SocialInfo, TransactionReceipt,
)


class ApprovalIn(BaseModel):
    token_address: str = Field(min_length=1, max_length=128)
    spender: str = Field(min_length=1, max_length=128)


class ClaimIn(BaseModel):
    recipient: str = Field(min_length=1, max_length=128)


class SocialIn(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    account: str = Field(min_length=1, max_length=128)


class SubmissionResponse(BaseModel):
    """The submitter's send result. Only the hash matters here."""
    hash: str | None = Field(None, max_length=130)

    @field_validator("hash")
    @classmethod
    def strip_hash(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None


class TransactionSubmit(BaseModel):
    """Submission body — response from the sender plus optional annotations."""
    response: SubmissionResponse
    summary: str | None = Field(None, max_length=500)
    approval: ApprovalIn | None = None
    claim: ClaimIn | None = None
    social: SocialIn | None = None

    def to_payload(self) -> CustomData:
        return CustomData(
            summary=self.summary,
            approval=ApprovalInfo(
                token_address=Address(self.approval.token_address),
                spender=Address(self.approval.spender),
            ) if self.approval else None,
            claim=ClaimInfo(
                recipient=Address(self.claim.recipient),
            ) if self.claim else None,
            social=SocialInfo(
                username=self.social.username,
                account=Address(self.social.account),
            ) if self.social else None,
        )


class ReceiptIn(BaseModel):
    """Confirmation payload reported by the watcher."""
    transaction_hash: str = Field(min_length=1, max_length=130)
    block_hash: str = Field(min_length=1, max_length=130)
    block_number: int = Field(ge=0)
    transaction_index: int = Field(ge=0)
    from_address: str = Field(min_length=1, max_length=128)
    to: str | None = Field(None, max_length=128)
    contract_address: str | None = Field(None, max_length=128)
    status: int | None = Field(None, ge=0, le=1)

    def to_receipt(self) -> TransactionReceipt:
        return TransactionReceipt(
            transaction_hash=TxHash(self.transaction_hash),
            block_hash=self.block_hash,
            block_number=BlockNumber(self.block_number),
            transaction_index=self.transaction_index,
            from_address=Address(self.from_address),
            to=Address(self.to) if self.to else None,
            contract_address=(
                Address(self.contract_address) if self.contract_address else None
            ),
            status=self.status,
        )


class BlockCheck(BaseModel):
    """Watcher report: block number at which the receipt was looked for."""
    block_number: int = Field(ge=0)
