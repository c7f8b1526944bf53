"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Request input
  2xxx: Pool lookup
  3xxx: Upstream RPC
  9xxx: System

Only AppError subclasses reach the client. The internal errors at the
bottom of this module are absorbed by the pool data service and recorded
in the metrics log.
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Request input ---

class MissingPoolAddressError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Missing poolAddress parameter", 400)


class InvalidPoolAddressError(AppError):
    def __init__(self, provided: str) -> None:
        super().__init__(1002, f"Invalid pool address format: {provided[:64]}", 400)


# --- 2xxx: Pool lookup ---

class PoolNotFoundError(AppError):
    def __init__(self, pool_address: str) -> None:
        super().__init__(2001, f"Pool not found or invalid: {pool_address}", 404)


# --- 3xxx: Upstream RPC ---

class UpstreamUnavailableError(AppError):
    def __init__(self, pool_address: str) -> None:
        super().__init__(
            3001, f"Failed to fetch pool data from RPC: {pool_address}", 504
        )


# --- 9xxx: System ---

class CacheStorageError(AppError):
    def __init__(self, detail: str = "Cache storage unavailable") -> None:
        super().__init__(9001, detail, 500)


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)


# --- Internal (never rendered to the client) ---

class PoolDecodeError(ValueError):
    """Account data is shorter than the pool layout or otherwise malformed."""


class Base58Error(ValueError):
    """Base-58 encoding could not be performed exactly."""


class CacheWriteError(OSError):
    """Temp write or atomic rename of a cache file failed."""
