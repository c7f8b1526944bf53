"""PoolDataApplicationService — cache-first pool lookup.

    validate address -> cache lookup -> (hit) attach decoded data if missing
                                     -> (miss) upstream fetch -> decode -> persist

Bad input, "not found / not ours", "every endpoint failed" and a cache root
that cannot be (re)created reach the caller as errors. Other failures
(decode, persist, metrics, token metadata) are logged and the response
degrades instead.
"""

import asyncio
import logging
import time
from dataclasses import dataclass

from src.pc_address.validator import is_valid_address, short_address
from src.pc_cache.application.schemas import CacheEntry
from src.pc_cache.domain.repository import PoolCacheStoreProtocol
from src.pc_common.datetime_utils import utc_now_iso
from src.pc_common.enums import CacheStatus, FetchOutcome, MetricAction
from src.pc_common.errors import (
    CacheWriteError,
    InvalidPoolAddressError,
    MissingPoolAddressError,
    PoolNotFoundError,
    UpstreamUnavailableError,
)
from src.pc_decoder.application.schemas import ParsedPoolData
from src.pc_decoder.domain.layout import decode_pool_state
from src.pc_metadata.domain.models import TokenMetadata, TokenMetadataProviderProtocol
from src.pc_metrics.sink import MetricsSink
from src.pc_upstream.application.schemas import RpcAccountResponse
from src.pc_upstream.infrastructure.rpc_fetcher import UpstreamFetcher

logger = logging.getLogger(__name__)


@dataclass
class PoolDataResult:
    entry: CacheEntry
    cache_status: CacheStatus


class PoolDataApplicationService:
    def __init__(
        self,
        store: PoolCacheStoreProtocol,
        fetcher: UpstreamFetcher,
        metrics: MetricsSink,
        metadata: TokenMetadataProviderProtocol | None = None,
        metadata_timeout_seconds: float = 2.0,
    ) -> None:
        self._store = store
        self._fetcher = fetcher
        self._metrics = metrics
        self._metadata = metadata
        self._metadata_timeout = metadata_timeout_seconds

    async def get_pool_data(self, pool_address: str | None) -> PoolDataResult:
        start = time.perf_counter()

        if not pool_address:
            raise MissingPoolAddressError()
        if not is_valid_address(pool_address):
            self._metrics.record(pool_address, MetricAction.INVALID_ADDRESS, error="Invalid format")
            raise InvalidPoolAddressError(pool_address)

        # Raises CacheStorageError (500) when the root cannot be recreated.
        await asyncio.to_thread(self._store.ensure_root)
        cached = await asyncio.to_thread(self._store.load, pool_address)
        if cached is not None:
            if cached.parsed_pool_data is None:
                cached = await self._attach_decoded(cached)
            return PoolDataResult(cached, CacheStatus.HIT)

        self._metrics.record(pool_address, MetricAction.CACHE_MISS)
        result = await self._fetcher.fetch(pool_address)

        if result.outcome in (FetchOutcome.NOT_FOUND, FetchOutcome.INVALID):
            raise PoolNotFoundError(pool_address)
        if result.outcome is FetchOutcome.ALL_FAILED or result.response is None:
            raise UpstreamUnavailableError(pool_address)

        entry = CacheEntry(
            generated_at=utc_now_iso(),
            pool_address=pool_address,
            rpc_response=result.response,
            parsed_pool_data=await self._decode(pool_address, result.response),
        )

        try:
            await asyncio.to_thread(self._store.save, pool_address, entry)
        except CacheWriteError as exc:
            logger.warning("serving %s without caching: %s", short_address(pool_address), exc)

        total_ms = (time.perf_counter() - start) * 1000
        self._metrics.record(
            pool_address,
            MetricAction.REQUEST_COMPLETE,
            total_ms,
            len(entry.model_dump_json()),
        )
        return PoolDataResult(entry, CacheStatus.MISS)

    async def _attach_decoded(self, entry: CacheEntry) -> CacheEntry:
        """Best-effort: decode a cached entry that predates decoding."""
        parsed = await self._decode(entry.pool_address, entry.rpc_response)
        if parsed is None:
            return entry
        enriched = entry.model_copy(update={"parsed_pool_data": parsed})
        try:
            await asyncio.to_thread(
                self._store.save, entry.pool_address, enriched, refresh_ttl=False
            )
        except CacheWriteError as exc:
            logger.warning("could not persist decoded data: %s", exc)
        return enriched

    async def _decode(
        self, pool_address: str, response: RpcAccountResponse
    ) -> ParsedPoolData | None:
        try:
            state = decode_pool_state(response.value.raw_bytes())
        except ValueError as exc:
            logger.warning("decode failed for %s: %s", short_address(pool_address), exc)
            self._metrics.record(pool_address, MetricAction.DECODE_FAILED, error=str(exc))
            return None
        parsed = ParsedPoolData.from_domain(pool_address, state)
        return await self._enrich_tokens(parsed)

    async def _enrich_tokens(self, parsed: ParsedPoolData) -> ParsedPoolData:
        if self._metadata is None:
            return parsed

        meta_a, meta_b = await asyncio.gather(
            self._lookup(self._metadata, parsed.token_a_mint),
            self._lookup(self._metadata, parsed.token_b_mint),
        )
        update: dict = {}
        for side, meta, raw in (
            ("a", meta_a, parsed.ratio_a_numerator),
            ("b", meta_b, parsed.ratio_b_denominator),
        ):
            if meta is None:
                continue
            update[f"token_{side}_ticker"] = meta.symbol
            update[f"token_{side}_name"] = meta.name
            if meta.decimals is not None:
                update[f"ratio_{side}_decimal"] = meta.decimals
                update[f"ratio_{side}_actual"] = raw / 10**meta.decimals
        return parsed.model_copy(update=update) if update else parsed

    async def _lookup(
        self, provider: TokenMetadataProviderProtocol, mint: str
    ) -> TokenMetadata | None:
        try:
            return await asyncio.wait_for(
                provider.lookup(mint), timeout=self._metadata_timeout
            )
        except TimeoutError:
            logger.warning("token metadata lookup timed out for %s", short_address(mint))
        except Exception:
            logger.warning(
                "token metadata lookup failed for %s", short_address(mint), exc_info=True
            )
        return None
