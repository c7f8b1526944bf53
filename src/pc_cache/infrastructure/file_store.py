"""File-backed pool cache: one JSON document per address.

Reads never touch the file (mtime is the TTL clock). Writes go to a
unique temp file in the same directory and are moved into place with
os.replace(), so a reader sees either the old document or the new one,
never a partial file. Concurrent writers for one address race on the
rename and the last one wins.
"""

import json
import logging
import os
import tempfile
import time
from collections.abc import Callable
from pathlib import Path

from pydantic import ValidationError

from src.pc_address.validator import sanitize_cache_key, short_address
from src.pc_cache.application.schemas import SCHEMA_VERSION, CacheEntry
from src.pc_common.enums import MetricAction
from src.pc_common.errors import CacheStorageError, CacheWriteError
from src.pc_metrics.sink import MetricsSink

logger = logging.getLogger(__name__)

CACHE_FILE_SUFFIX = ".json"
TEMP_FILE_SUFFIX = ".tmp"


class FilePoolCacheStore:
    def __init__(
        self,
        root: Path,
        metrics: MetricsSink,
        ttl_seconds: int = 24 * 60 * 60,
        schema_version: str = SCHEMA_VERSION,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._root = Path(root)
        self._metrics = metrics
        self._ttl = ttl_seconds
        self._schema_version = schema_version
        self._clock = clock

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, address: str) -> Path:
        return self._root / f"{sanitize_cache_key(address)}{CACHE_FILE_SUFFIX}"

    def ensure_root(self) -> None:
        try:
            self._root.mkdir(mode=0o755, parents=True, exist_ok=True)
        except OSError as exc:
            logger.error("failed to create cache directory %s: %s", self._root, exc)
            raise CacheStorageError("Server configuration error") from exc

    def load(self, address: str) -> CacheEntry | None:
        """Return the cached entry, or None for any kind of miss."""
        path = self.path_for(address)
        try:
            stat = path.stat()
        except FileNotFoundError:
            return None
        except OSError as exc:
            self._metrics.record(address, MetricAction.CACHE_READ_FAILED, error=str(exc))
            return None

        age = self._clock() - stat.st_mtime
        if age > self._ttl:
            self._metrics.record(address, MetricAction.CACHE_EXPIRED, file_size_bytes=stat.st_size)
            return None

        try:
            raw = path.read_text(encoding="utf-8")
        except OSError:
            self._metrics.record(
                address, MetricAction.CACHE_READ_FAILED, error="Failed to read cache file"
            )
            return None

        try:
            doc = json.loads(raw)
        except ValueError:
            doc = None
        if not isinstance(doc, dict) or not doc:
            self._metrics.record(
                address, MetricAction.CACHE_READ_FAILED, error="Invalid JSON in cache file"
            )
            return None

        version = doc.get("schema_version")
        if version != self._schema_version:
            self._metrics.record(
                address, MetricAction.CACHE_SCHEMA_MISMATCH, error=f"Version: {version}"
            )
            return None

        try:
            entry = CacheEntry.model_validate(doc)
        except ValidationError as exc:
            self._metrics.record(
                address, MetricAction.CACHE_READ_FAILED,
                error=f"Invalid cache document ({exc.error_count()} errors)",
            )
            return None

        if entry.pool_address != address:
            self._metrics.record(
                address, MetricAction.CACHE_READ_FAILED, error="Cache key collision"
            )
            return None

        self._metrics.record(address, MetricAction.CACHE_HIT, file_size_bytes=len(raw))
        return entry

    def save(self, address: str, entry: CacheEntry, *, refresh_ttl: bool = True) -> int:
        """Atomically write entry. Returns bytes written.

        With refresh_ttl=False the previous file's mtime is carried over,
        so rewriting an entry (e.g. to attach decoded data) does not extend
        its lifetime.

        Raises CacheWriteError; the temp file is removed on failure.
        """
        path = self.path_for(address)
        payload = json.dumps(entry.to_document(), indent=4)

        previous_mtime: float | None = None
        if not refresh_ttl:
            try:
                previous_mtime = path.stat().st_mtime
            except OSError:
                previous_mtime = None

        tmp_name: str | None = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self._root, prefix=f".{path.stem}.", suffix=TEMP_FILE_SUFFIX
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.chmod(tmp_name, 0o644)
            if previous_mtime is not None:
                os.utime(tmp_name, (previous_mtime, previous_mtime))
            os.replace(tmp_name, path)
        except OSError as exc:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except FileNotFoundError:
                    pass
                except OSError:
                    logger.warning("could not remove temp file %s", tmp_name)
            self._metrics.record(address, MetricAction.CACHE_WRITE_FAILED, error=str(exc))
            logger.warning("cache write failed for %s: %s", short_address(address), exc)
            raise CacheWriteError(f"Failed to write cache for {short_address(address)}") from exc

        size = len(payload.encode("utf-8"))
        self._metrics.record(address, MetricAction.CACHE_WRITE, file_size_bytes=size)
        return size
