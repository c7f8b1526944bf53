"""UpstreamFetcher — getAccountInfo against an ordered endpoint list.

Endpoints are tried primary first. A transport failure, non-2xx status,
unparseable body or JSON-RPC error moves on to the next endpoint. Any
structurally valid answer ends the walk:
  - value is null            -> NOT_FOUND (ledger fact, no point retrying)
  - owner != PROGRAM_ID      -> INVALID
  - data < min bytes         -> INVALID
  - otherwise                -> OK, envelope returned unchanged
Worst case latency is len(endpoints) x timeout.
"""

import logging
import time

import httpx
from pydantic import ValidationError

from src.pc_address.validator import short_address
from src.pc_common.enums import FetchOutcome, MetricAction
from src.pc_metrics.sink import MetricsSink
from src.pc_upstream.application.schemas import (
    RpcAccountResponse,
    RpcEnvelope,
    RpcResultEnvelope,
    build_get_account_info,
)
from src.pc_upstream.domain.models import EndpointAttempt, FetchResult

logger = logging.getLogger(__name__)

USER_AGENT = "PoolDataCache/1.0"


def _endpoint_label(endpoint: str) -> str:
    """Host only; endpoint paths often carry API keys."""
    try:
        return httpx.URL(endpoint).host or endpoint
    except httpx.InvalidURL:
        return "<invalid-url>"


class UpstreamFetcher:
    def __init__(
        self,
        client: httpx.AsyncClient,
        endpoints: list[str],
        program_id: str,
        metrics: MetricsSink,
        timeout_seconds: float = 15.0,
        commitment: str = "confirmed",
        min_data_bytes: int = 100,
    ) -> None:
        self._client = client
        self._endpoints = list(endpoints)
        self._program_id = program_id.strip()
        self._metrics = metrics
        self._timeout = timeout_seconds
        self._commitment = commitment
        self._min_data_bytes = min_data_bytes

    @property
    def endpoints(self) -> list[str]:
        return list(self._endpoints)

    async def fetch(self, address: str) -> FetchResult:
        payload = build_get_account_info(address, self._commitment)
        attempts: list[EndpointAttempt] = []

        for index, endpoint in enumerate(self._endpoints):
            label = _endpoint_label(endpoint)
            if index > 0:
                logger.info(
                    "falling back to RPC endpoint #%d (%s) for %s",
                    index, label, short_address(address),
                )

            start = time.perf_counter()
            rpc_result, error, size = await self._post(endpoint, payload)
            elapsed_ms = (time.perf_counter() - start) * 1000
            attempts.append(EndpointAttempt(label, elapsed_ms, error))

            if rpc_result is None:
                logger.warning("RPC %s failed for %s: %s", label, short_address(address), error)
                self._metrics.record(
                    address, MetricAction.RPC_FETCH_FAILED, elapsed_ms,
                    error=error, endpoint=label,
                )
                continue

            result = self._evaluate(address, rpc_result, elapsed_ms, label)
            result.attempts = attempts
            if result.ok:
                self._metrics.record(
                    address, MetricAction.RPC_FETCH, elapsed_ms, size, endpoint=label
                )
            return result

        return FetchResult(
            outcome=FetchOutcome.ALL_FAILED,
            reason=f"All {len(self._endpoints)} RPC endpoints failed",
            attempts=attempts,
        )

    async def _post(
        self, endpoint: str, payload: dict
    ) -> tuple[RpcResultEnvelope | None, str | None, int | None]:
        """POST once. Returns (result, None, size) or (None, error, None)."""
        try:
            resp = await self._client.post(
                endpoint,
                json=payload,
                headers={"User-Agent": USER_AGENT},
                timeout=self._timeout,
            )
            resp.raise_for_status()
            body = resp.json()
        except httpx.TimeoutException:
            return None, "Timeout", None
        except httpx.HTTPStatusError as exc:
            return None, f"HTTP {exc.response.status_code}", None
        except httpx.HTTPError as exc:
            return None, f"Network error: {exc.__class__.__name__}", None
        except ValueError:
            return None, "Invalid JSON response", None

        if not isinstance(body, dict):
            return None, "Invalid JSON response", None
        try:
            envelope = RpcEnvelope.model_validate(body)
        except ValidationError:
            return None, "Malformed RPC response", None

        if envelope.error is not None:
            return None, envelope.error.message, None
        if envelope.result is None:
            return None, "Missing result", None
        return envelope.result, None, len(resp.content)

    def _evaluate(
        self, address: str, result: RpcResultEnvelope, elapsed_ms: float, label: str
    ) -> FetchResult:
        if result.value is None:
            self._metrics.record(
                address, MetricAction.POOL_NOT_FOUND, elapsed_ms,
                error="Account does not exist", endpoint=label,
            )
            return FetchResult(FetchOutcome.NOT_FOUND, reason="Account does not exist")

        owner = result.value.owner.strip()
        if owner != self._program_id:
            reason = f"Expected: '{self._program_id}', Got: '{owner}'"
            self._metrics.record(
                address, MetricAction.INVALID_OWNER, elapsed_ms, error=reason, endpoint=label
            )
            return FetchResult(FetchOutcome.INVALID, reason=reason)

        try:
            data_len = len(result.value.raw_bytes())
        except ValueError as exc:
            data_len = -1
            reason = str(exc)
        else:
            reason = f"Account data too small ({data_len} bytes)"
        if data_len < self._min_data_bytes:
            self._metrics.record(
                address, MetricAction.INSUFFICIENT_DATA, elapsed_ms, error=reason, endpoint=label
            )
            return FetchResult(FetchOutcome.INVALID, reason=reason)

        return FetchResult(
            FetchOutcome.OK,
            response=RpcAccountResponse(context=result.context, value=result.value),
        )
