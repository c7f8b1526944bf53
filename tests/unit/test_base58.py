"""Tests for base-58 encoding."""

import pytest

from src.pc_common.errors import Base58Error
from src.pc_decoder.domain.base58 import b58decode, b58encode


class TestB58Encode:
    def test_empty(self) -> None:
        assert b58encode(b"") == ""

    def test_single_zero_byte(self) -> None:
        assert b58encode(b"\x00") == "1"

    def test_all_zero_pubkey_is_all_ones(self) -> None:
        assert b58encode(bytes(32)) == "1" * 32

    def test_leading_zeros_preserved(self) -> None:
        assert b58encode(b"\x00\x00\x01") == "112"

    def test_known_vectors(self) -> None:
        assert b58encode(b"\x39") == "z"
        assert b58encode(b"\x3a") == "21"
        assert b58encode(b"hello world") == "StV1DL6CwTryKyV"

    def test_token_program_id(self) -> None:
        key = bytes.fromhex(
            "06ddf6e1d765a193d9cbe146ceeb79ac1cb485ed5f5b37913a8cf5857eff00a9"
        )
        assert b58encode(key) == "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"

    def test_exceeds_64_bit_range(self) -> None:
        encoded = b58encode(b"\xff" * 32)
        assert len(encoded) == 44
        assert b58decode(encoded) == b"\xff" * 32

    def test_rejects_non_bytes(self) -> None:
        with pytest.raises(Base58Error):
            b58encode("not bytes")  # type: ignore[arg-type]


class TestB58Decode:
    def test_inverse_of_encode(self) -> None:
        data = b"\x00\x00" + bytes(range(1, 31))
        assert b58decode(b58encode(data)) == data

    def test_rejects_invalid_character(self) -> None:
        with pytest.raises(Base58Error):
            b58decode("0abc")
