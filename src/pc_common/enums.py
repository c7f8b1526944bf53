"""Global enums — values are written verbatim to the metrics log and headers."""

from enum import Enum


class MetricAction(str, Enum):
    INVALID_ADDRESS = "invalid_address"
    CACHE_HIT = "cache_hit"
    CACHE_MISS = "cache_miss"
    CACHE_EXPIRED = "cache_expired"
    CACHE_SCHEMA_MISMATCH = "cache_schema_mismatch"
    CACHE_READ_FAILED = "cache_read_failed"
    CACHE_WRITE = "cache_write"
    CACHE_WRITE_FAILED = "cache_write_failed"
    RPC_FETCH = "rpc_fetch"
    RPC_FETCH_FAILED = "rpc_fetch_failed"
    POOL_NOT_FOUND = "pool_not_found"
    INVALID_OWNER = "invalid_owner"
    INSUFFICIENT_DATA = "insufficient_data"
    DECODE_FAILED = "decode_failed"
    REQUEST_COMPLETE = "request_complete"


class FetchOutcome(str, Enum):
    """Result of walking the upstream endpoint list."""
    OK = "OK"
    NOT_FOUND = "NOT_FOUND"        # account does not exist (definitive)
    INVALID = "INVALID"            # wrong owner or too little data
    ALL_FAILED = "ALL_FAILED"      # every endpoint errored


class CacheStatus(str, Enum):
    HIT = "hit"
    MISS = "miss"
