"""Append-only metrics log.

One JSON object per line in <cache root>/metrics.log:
    {"timestamp": "...", "pool_address": "4Ld8FHzq...", "action": "cache_hit",
     "response_time_ms": null, "file_size_bytes": 2211, "error": null}

Appends take an exclusive advisory lock so concurrent workers never
interleave partial lines. The lock is taken without blocking; if another
writer holds it past a few short retries the event is dropped, so a
record() call on the event loop never waits on another process. Failed
writes are logged and dropped; they never fail the request that produced
them.
"""

import fcntl
import json
import logging
import time
from pathlib import Path
from typing import IO, Any

from src.pc_address.validator import short_address
from src.pc_common.datetime_utils import utc_now_iso
from src.pc_common.enums import MetricAction

logger = logging.getLogger(__name__)

METRICS_FILENAME = "metrics.log"
LOCK_RETRIES = 3
LOCK_RETRY_DELAY_SECONDS = 0.002


class MetricsSink:
    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def record(
        self,
        pool_address: str,
        action: MetricAction,
        response_time_ms: float | None = None,
        file_size_bytes: int | None = None,
        error: str | None = None,
        **extra: Any,
    ) -> None:
        entry: dict[str, Any] = {
            "timestamp": utc_now_iso(),
            "pool_address": short_address(pool_address),
            "action": action.value,
            "response_time_ms": (
                round(response_time_ms, 2) if response_time_ms is not None else None
            ),
            "file_size_bytes": file_size_bytes,
            "error": error,
        }
        entry.update(extra)
        line = json.dumps(entry) + "\n"
        try:
            with open(self._path, "a", encoding="utf-8") as fh:
                if not self._try_lock(fh):
                    logger.warning("metrics log busy, dropped %s event", action.value)
                    return
                try:
                    fh.write(line)
                    fh.flush()
                finally:
                    fcntl.flock(fh, fcntl.LOCK_UN)
        except OSError as exc:
            logger.warning("metrics write failed (%s): %s", action.value, exc)

    def _try_lock(self, fh: IO[str]) -> bool:
        """Non-blocking LOCK_EX with a few short retries.

        record() runs on the event loop, so waiting on another writer's lock
        is bounded to LOCK_RETRIES * LOCK_RETRY_DELAY_SECONDS.
        """
        for attempt in range(LOCK_RETRIES):
            try:
                fcntl.flock(fh, fcntl.LOCK_EX | fcntl.LOCK_NB)
                return True
            except BlockingIOError:
                if attempt < LOCK_RETRIES - 1:
                    time.sleep(LOCK_RETRY_DELAY_SECONDS)
        return False
