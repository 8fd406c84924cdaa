"""Port for resolving naming-service names to addresses."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class NameResolver(Protocol):
    """Resolve a lowercased name (``foo.eth``) to a checksummed address.

    Return ``None`` when the name has no address. Raise
    ``NameResolutionError`` when the backing service fails.
    """

    async def resolve(self, name: str) -> str | None: ...


__all__ = ["NameResolver"]
