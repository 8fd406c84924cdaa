"""Amount policies assigning a base-unit token amount to each claim."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from tweetdrop.domain.errors import AmountPolicyError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from tweetdrop.domain.model import ResolvedClaim

MAX_UINT256 = 2**256 - 1


@runtime_checkable
class AmountPolicy(Protocol):
    def amount_for(self, claim: ResolvedClaim) -> int: ...


def parse_amount(value: object) -> int:
    """Parse an amount from an int, a decimal string or a ``0x`` hex string.

    Raises ``AmountPolicyError`` for anything that is not a uint256.
    """

    if isinstance(value, bool):
        raise AmountPolicyError(f"Invalid amount: {value!r}")
    if isinstance(value, int):
        amount = value
    elif isinstance(value, str):
        text = value.strip()
        try:
            amount = int(text, 16) if text.lower().startswith("0x") else int(text, 10)
        except ValueError as exc:
            raise AmountPolicyError(f"Invalid amount: {value!r}") from exc
    else:
        raise AmountPolicyError(f"Invalid amount: {value!r}")

    if amount < 0 or amount > MAX_UINT256:
        raise AmountPolicyError(f"Amount out of uint256 range: {value!r}")
    return amount


@dataclass(frozen=True, slots=True)
class ConstantAmount:
    """Same amount for every claim."""

    value: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", parse_amount(self.value))

    def amount_for(self, claim: ResolvedClaim) -> int:  # noqa: ARG002
        return self.value


@dataclass(frozen=True, slots=True)
class AmountTable:
    """Per-address, then per-handle lookup with an optional fallback.

    Address keys are matched case-insensitively so hand-written tables do not
    need checksummed addresses.
    """

    by_address: Mapping[str, int] = field(default_factory=dict[str, int])
    by_handle: Mapping[str, int] = field(default_factory=dict[str, int])
    default: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "by_address",
            {key.lower(): parse_amount(value) for key, value in self.by_address.items()},
        )
        object.__setattr__(
            self,
            "by_handle",
            {key: parse_amount(value) for key, value in self.by_handle.items()},
        )
        if self.default is not None:
            object.__setattr__(self, "default", parse_amount(self.default))

    def amount_for(self, claim: ResolvedClaim) -> int:
        amount = self.by_address.get(claim.address.lower())
        if amount is not None:
            return amount
        amount = self.by_handle.get(claim.author_handle)
        if amount is not None:
            return amount
        if self.default is not None:
            return self.default
        raise AmountPolicyError(
            f"No amount configured for {claim.address} (@{claim.author_handle})"
        )

    @classmethod
    def from_mapping(
        cls, entries: Mapping[str, object], *, default: int | None = None
    ) -> AmountTable:
        """Split a flat ``{handle-or-address: amount}`` mapping into the two tables."""

        by_address: dict[str, int] = {}
        by_handle: dict[str, int] = {}
        for key, value in entries.items():
            if _looks_like_address(key):
                by_address[key] = parse_amount(value)
            else:
                by_handle[key.removeprefix("@")] = parse_amount(value)
        return cls(by_address=by_address, by_handle=by_handle, default=default)


def _looks_like_address(key: str) -> bool:
    return len(key) == 42 and key[:2].lower() == "0x"
