"""Shared test fixtures."""

import json
from collections.abc import Callable

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from config.settings import Settings
from src.main import app
from src.pc_cache.infrastructure.file_store import FilePoolCacheStore
from src.pc_metrics.sink import METRICS_FILENAME, MetricsSink
from src.pc_pool.application.service import PoolDataApplicationService
from src.pc_upstream.infrastructure.rpc_fetcher import UpstreamFetcher
from tests.pool_builders import PROGRAM_ID

PRIMARY = "https://primary.rpc.test/key123"
FALLBACK_1 = "https://fallback-1.rpc.test"
FALLBACK_2 = "https://fallback-2.rpc.test"


class FakeRpc:
    """Per-host scripted responses for httpx.MockTransport.

    A script entry is a dict (JSON body, 200), an int (bare status code),
    or an exception instance to raise.
    """

    def __init__(self) -> None:
        self.scripts: dict[str, object] = {}
        self.calls: list[str] = []
        self.payloads: list[dict] = []

    def on(self, url: str, reply: object) -> None:
        self.scripts[httpx.URL(url).host] = reply

    def handler(self, request: httpx.Request) -> httpx.Response:
        host = request.url.host
        self.calls.append(host)
        self.payloads.append(json.loads(request.content))
        reply = self.scripts.get(host, 500)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, int):
            return httpx.Response(reply, text="upstream error")
        return httpx.Response(200, json=reply)

    def hosts(self, *urls: str) -> list[str]:
        return [httpx.URL(u).host for u in urls]


@pytest.fixture
def fake_rpc() -> FakeRpc:
    return FakeRpc()


@pytest.fixture
async def rpc_client(fake_rpc: FakeRpc) -> httpx.AsyncClient:
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_rpc.handler)) as c:
        yield c


@pytest.fixture
def metrics(tmp_path) -> MetricsSink:
    return MetricsSink(tmp_path / METRICS_FILENAME)


@pytest.fixture
def read_metrics(metrics: MetricsSink) -> Callable[[], list[dict]]:
    def _read() -> list[dict]:
        if not metrics.path.exists():
            return []
        return [json.loads(line) for line in metrics.path.read_text().splitlines()]

    return _read


@pytest.fixture
def store(tmp_path, metrics: MetricsSink) -> FilePoolCacheStore:
    s = FilePoolCacheStore(tmp_path, metrics, ttl_seconds=24 * 60 * 60)
    s.ensure_root()
    return s


@pytest.fixture
def fetcher(rpc_client: httpx.AsyncClient, metrics: MetricsSink) -> UpstreamFetcher:
    return UpstreamFetcher(
        rpc_client,
        [PRIMARY, FALLBACK_1, FALLBACK_2],
        PROGRAM_ID,
        metrics,
        timeout_seconds=1.0,
    )


@pytest.fixture
def service(store, fetcher, metrics) -> PoolDataApplicationService:
    return PoolDataApplicationService(store, fetcher, metrics)


@pytest.fixture
async def client(service: PoolDataApplicationService, tmp_path) -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints.

    ASGITransport does not run the lifespan, so app.state is wired here.
    """
    app.state.settings = Settings(CACHE_DIR=tmp_path)
    app.state.pool_service = service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
