"""Token metadata read from a local JSON cache.

Another process keeps <TOKEN_METADATA_DIR>/<mint>.json up to date:
    {"symbol": "USDC", "name": "USD Coin", "decimals": 6}
Anything missing or unreadable is simply "no metadata".
"""

import asyncio
import json
import logging
from pathlib import Path

from src.pc_address.validator import is_valid_address, sanitize_cache_key
from src.pc_metadata.domain.models import TokenMetadata

logger = logging.getLogger(__name__)


def _parse(doc: object) -> TokenMetadata | None:
    if not isinstance(doc, dict):
        return None
    symbol = doc.get("symbol")
    name = doc.get("name")
    decimals = doc.get("decimals")
    if not isinstance(decimals, int) or isinstance(decimals, bool) or not 0 <= decimals <= 18:
        decimals = None
    return TokenMetadata(
        symbol=symbol if isinstance(symbol, str) and symbol else None,
        name=name if isinstance(name, str) and name else None,
        decimals=decimals,
    )


class FileTokenMetadataProvider:
    def __init__(self, root: Path) -> None:
        self._root = Path(root)

    def _read(self, mint: str) -> TokenMetadata | None:
        path = self._root / f"{sanitize_cache_key(mint)}.json"
        try:
            doc = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as exc:
            logger.warning("unreadable token metadata %s: %s", path.name, exc)
            return None
        return _parse(doc)

    async def lookup(self, mint: str) -> TokenMetadata | None:
        if not is_valid_address(mint):
            return None
        return await asyncio.to_thread(self._read, mint)
