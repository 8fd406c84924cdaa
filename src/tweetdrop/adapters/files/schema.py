"""Pydantic models for the JSONL hand-off files and the claim-set artifact."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from tweetdrop.domain.model import ClaimProof, ClaimSet


class ClaimEntry(BaseModel):
    """One line of a batch or airdrop file.

    ``amount`` is a decimal string; batch files written by ``collect`` leave it
    out and ``compile`` fills it in.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    twitter: str = Field(validation_alias=AliasChoices("twitter", "username"))
    address: str
    amount: str | None = None

    @field_validator("amount", mode="before")
    @classmethod
    def _stringify_amount(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    def to_line(self) -> str:
        return self.model_dump_json(exclude_none=True)


class ClaimProofDocument(BaseModel):
    index: int
    amount: str
    proof: list[str]


class ClaimSetDocument(BaseModel):
    """Artifact layout consumed by claim verifiers; field names are a contract."""

    model_config = ConfigDict(populate_by_name=True)

    merkle_root: str = Field(alias="merkleRoot")
    claims: dict[str, ClaimProofDocument]

    @classmethod
    def from_claim_set(cls, claim_set: ClaimSet) -> ClaimSetDocument:
        return cls(
            merkle_root=claim_set.merkle_root,
            claims={
                address: ClaimProofDocument(
                    index=entry.index, amount=entry.amount_hex, proof=list(entry.proof)
                )
                for address, entry in claim_set.claims.items()
            },
        )

    def to_claim_set(self) -> ClaimSet:
        return ClaimSet(
            merkle_root=self.merkle_root,
            claims={
                address: ClaimProof(
                    index=entry.index, amount_hex=entry.amount, proof=tuple(entry.proof)
                )
                for address, entry in self.claims.items()
            },
        )
