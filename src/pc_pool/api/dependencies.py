"""Composition root for the pool data service.

build_pool_service() is called once from the app lifespan with the shared
httpx client; handlers receive the instance through get_pool_service().
Tests assign app.state.pool_service directly.
"""

import httpx
from fastapi import Request

from config.settings import Settings
from src.pc_cache.infrastructure.file_store import FilePoolCacheStore
from src.pc_metadata.infrastructure.file_provider import FileTokenMetadataProvider
from src.pc_metrics.sink import METRICS_FILENAME, MetricsSink
from src.pc_pool.application.service import PoolDataApplicationService
from src.pc_upstream.infrastructure.rpc_fetcher import UpstreamFetcher


def build_pool_service(
    settings: Settings, client: httpx.AsyncClient
) -> PoolDataApplicationService:
    metrics = MetricsSink(settings.CACHE_DIR / METRICS_FILENAME)
    store = FilePoolCacheStore(
        settings.CACHE_DIR,
        metrics,
        ttl_seconds=settings.CACHE_TTL_SECONDS,
    )
    store.ensure_root()
    fetcher = UpstreamFetcher(
        client,
        settings.rpc_endpoints,
        settings.PROGRAM_ID,
        metrics,
        timeout_seconds=settings.RPC_TIMEOUT_SECONDS,
        commitment=settings.RPC_COMMITMENT,
        min_data_bytes=settings.MIN_ACCOUNT_DATA_BYTES,
    )
    metadata = (
        FileTokenMetadataProvider(settings.TOKEN_METADATA_DIR)
        if settings.TOKEN_METADATA_DIR is not None
        else None
    )
    return PoolDataApplicationService(
        store,
        fetcher,
        metrics,
        metadata=metadata,
        metadata_timeout_seconds=settings.TOKEN_METADATA_TIMEOUT_SECONDS,
    )


def get_pool_service(request: Request) -> PoolDataApplicationService:
    return request.app.state.pool_service


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
