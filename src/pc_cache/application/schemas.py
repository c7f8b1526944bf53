"""Pydantic schema for the persisted cache document.

On disk (<CACHE_DIR>/<sanitized address>.json):
{
    "schema_version": "1.0.0",
    "generated_at": "2026-01-01T00:00:00+00:00",
    "pool_address": "<address>",
    "rpc_response": {"context": {...}, "value": {...}},
    "parsed_pool_data": {...}          // optional
}

The same document, with parsed_pool_data attached when decoding worked,
is the body of a successful pool data response.
"""

from pydantic import BaseModel

from src.pc_decoder.application.schemas import ParsedPoolData
from src.pc_upstream.application.schemas import RpcAccountResponse

# Bump when the shape of this document or of ParsedPoolData changes;
# older files are then treated as cache misses.
SCHEMA_VERSION = "1.0.0"


class CacheEntry(BaseModel):
    schema_version: str = SCHEMA_VERSION
    generated_at: str
    pool_address: str
    rpc_response: RpcAccountResponse
    parsed_pool_data: ParsedPoolData | None = None

    def to_document(self) -> dict:
        doc = self.model_dump(by_alias=True, exclude={"rpc_response", "parsed_pool_data"})
        doc["rpc_response"] = self.rpc_response.to_document()
        if self.parsed_pool_data is not None:
            doc["parsed_pool_data"] = self.parsed_pool_data.model_dump()
        return doc
