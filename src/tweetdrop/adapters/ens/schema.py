"""Pydantic models for Ethereum JSON-RPC responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class RpcBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class JsonRpcError(RpcBaseModel):
    code: int
    message: str
    data: object | None = None


class JsonRpcResponse(RpcBaseModel):
    jsonrpc: str = "2.0"
    id: int | str | None = None
    result: str | None = None
    error: JsonRpcError | None = None
