"""Public interface for the ENS adapter."""

from __future__ import annotations

from .client import EnsNameResolver, namehash
from .schema import JsonRpcError, JsonRpcResponse

__all__ = ["EnsNameResolver", "JsonRpcError", "JsonRpcResponse", "namehash"]
