"""Tests for pool address validation and cache-key sanitizing."""

import pytest

from src.pc_address.validator import is_valid_address, sanitize_cache_key, short_address
from tests.pool_builders import POOL_ADDRESS, SYSTEM_ADDRESS


class TestIsValidAddress:
    def test_system_program_address(self) -> None:
        assert is_valid_address(SYSTEM_ADDRESS) is True

    def test_typical_44_char_address(self) -> None:
        assert is_valid_address(POOL_ADDRESS) is True

    @pytest.mark.parametrize("value", ["", None])
    def test_rejects_empty(self, value) -> None:
        assert is_valid_address(value) is False

    def test_rejects_too_short(self) -> None:
        assert is_valid_address("1" * 31) is False

    def test_rejects_too_long(self) -> None:
        assert is_valid_address("1" * 45) is False

    @pytest.mark.parametrize("bad_char", ["0", "O", "I", "l", "-", "/", " ", "é"])
    def test_rejects_chars_outside_alphabet(self, bad_char: str) -> None:
        assert is_valid_address(bad_char + "1" * 40) is False

    def test_rejects_trailing_newline(self) -> None:
        assert is_valid_address(SYSTEM_ADDRESS + "\n") is False

    def test_rejects_path_traversal(self) -> None:
        assert is_valid_address("../../etc/passwd" + "1" * 20) is False


class TestSanitizeCacheKey:
    def test_keeps_valid_address_unchanged(self) -> None:
        assert sanitize_cache_key(POOL_ADDRESS) == POOL_ADDRESS

    def test_strips_everything_outside_ascii_alnum(self) -> None:
        assert sanitize_cache_key("../ab/c.d-e_f\x00") == "abcdef"

    def test_keeps_digits_the_address_check_rejects(self) -> None:
        # 0/O/I/l are filesystem-safe, only the validity check rejects them
        assert sanitize_cache_key("0OIl") == "0OIl"


def test_short_address() -> None:
    assert short_address(POOL_ADDRESS) == "4Ld8FHzq..."
