"""Pool address validation and cache-key sanitizing.

The cache key is always derived through sanitize_cache_key(), even for
addresses that already passed is_valid_address().
"""

import re

# Base-58 alphabet: ASCII letters and digits minus 0, O, I, l
_ADDRESS_RE = re.compile(r"[1-9A-HJ-NP-Za-km-z]{32,44}")
_UNSAFE_RE = re.compile(r"[^A-Za-z0-9]")

MIN_ADDRESS_LENGTH = 32
MAX_ADDRESS_LENGTH = 44


def is_valid_address(address: str | None) -> bool:
    if not address:
        return False
    if not MIN_ADDRESS_LENGTH <= len(address) <= MAX_ADDRESS_LENGTH:
        return False
    return _ADDRESS_RE.fullmatch(address) is not None


def sanitize_cache_key(address: str) -> str:
    """Strip every character outside [A-Za-z0-9]."""
    return _UNSAFE_RE.sub("", address)


def short_address(address: str) -> str:
    """First 8 characters plus an ellipsis, for logs and metrics."""
    return f"{address[:8]}..."
