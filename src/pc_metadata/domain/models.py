"""Domain models for pc_metadata."""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class TokenMetadata:
    symbol: str | None = None
    name: str | None = None
    decimals: int | None = None


class TokenMetadataProviderProtocol(Protocol):
    async def lookup(self, mint: str) -> TokenMetadata | None: ...
