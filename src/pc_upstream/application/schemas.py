"""Pydantic models for the getAccountInfo JSON-RPC contract.

Request:
  {"jsonrpc": "2.0", "id": 1, "method": "getAccountInfo",
   "params": ["<address>", {"encoding": "base64", "commitment": "confirmed"}]}

Response:
  {"jsonrpc": "2.0", "id": 1,
   "result": {"context": {"slot": 123},
              "value": {"data": ["<base64>", "base64"], "owner": "...",
                        "lamports": 1, "executable": false, "rentEpoch": 0}}}
  or {"error": {"code": -32602, "message": "..."}}

`value` is null when the account does not exist.
"""

import base64
import binascii
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class RpcContext(BaseModel):
    model_config = ConfigDict(extra="allow")

    slot: int


class AccountValue(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    data: list[str] = Field(min_length=1)
    owner: str
    lamports: int
    executable: bool = False
    rent_epoch: int | None = Field(default=None, alias="rentEpoch")
    space: int | None = None

    @property
    def encoding(self) -> str:
        return self.data[1] if len(self.data) > 1 else "base64"

    def raw_bytes(self) -> bytes:
        """Decode the first data chunk using its transport encoding.

        Raises ValueError if the chunk is not valid for that encoding.
        """
        if self.encoding != "base64":
            raise ValueError(f"Unsupported account data encoding: {self.encoding}")
        try:
            return base64.b64decode(self.data[0], validate=True)
        except binascii.Error as exc:
            raise ValueError(f"Invalid base64 account data: {exc}") from exc


class RpcAccountResponse(BaseModel):
    """The `result` of a successful getAccountInfo call for an existing account."""

    context: RpcContext
    value: AccountValue

    def to_document(self) -> dict[str, Any]:
        # Only keys the upstream actually sent; explicit nulls are kept.
        return self.model_dump(by_alias=True, exclude_unset=True)


class RpcError(BaseModel):
    model_config = ConfigDict(extra="allow")

    code: int | None = None
    message: str = "Unknown RPC error"


class RpcResultEnvelope(BaseModel):
    """`result` before the existence check: `value` may be null."""

    context: RpcContext
    value: AccountValue | None = None


class RpcEnvelope(BaseModel):
    model_config = ConfigDict(extra="allow")

    result: RpcResultEnvelope | None = None
    error: RpcError | None = None


def build_get_account_info(address: str, commitment: str) -> dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "id": 1,
        "method": "getAccountInfo",
        "params": [
            address,
            {"encoding": "base64", "commitment": commitment},
        ],
    }
