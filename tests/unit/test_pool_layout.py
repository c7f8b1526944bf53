"""Tests for the fixed-layout pool decoder."""

import struct
from dataclasses import fields

import pytest

from src.pc_common.errors import PoolDecodeError
from src.pc_decoder.application.schemas import ParsedPoolData
from src.pc_decoder.domain.base58 import b58encode
from src.pc_decoder.domain.layout import (
    POOL_STATE_LAYOUT,
    POOL_STATE_SIZE,
    decode_flags,
    decode_pool_state,
)
from src.pc_decoder.domain.models import PoolState
from tests.pool_builders import POOL_ADDRESS, build_pool_bytes, pubkey_bytes


class TestLayout:
    def test_total_size(self) -> None:
        assert POOL_STATE_SIZE == 358

    def test_field_count(self) -> None:
        assert len(POOL_STATE_LAYOUT) == 29
        # every layout field plus flags_decoded
        assert len(fields(PoolState)) == len(POOL_STATE_LAYOUT) + 1

    def test_layout_matches_dataclass_order(self) -> None:
        names = [f.name for f in fields(PoolState)][:-1]
        assert names == [name for name, _ in POOL_STATE_LAYOUT]


class TestDecodePoolState:
    def test_pubkeys_are_base58(self) -> None:
        state = decode_pool_state(build_pool_bytes())
        assert state.owner == b58encode(pubkey_bytes(1))
        assert state.token_a_mint == b58encode(pubkey_bytes(2))
        assert state.lp_token_b_mint == b58encode(pubkey_bytes(7))

    def test_integers_little_endian(self) -> None:
        state = decode_pool_state(build_pool_bytes(ratio_a=1, ratio_b=2**64 - 1))
        assert state.ratio_a_numerator == 1
        assert state.ratio_b_denominator == 2**64 - 1
        assert state.total_token_a_liquidity == 5_000
        assert state.total_token_b_liquidity == 10_000

    def test_bump_seeds_and_counters(self) -> None:
        state = decode_pool_state(build_pool_bytes())
        assert state.pool_authority_bump_seed == 255
        assert state.lp_token_b_mint_bump_seed == 251
        assert state.contract_liquidity_fee == 1_000
        assert state.swap_contract_fee == 2_000
        assert state.collected_fees_token_a == 11
        assert state.total_fees_withdrawn_token_b == 14
        assert state.total_sol_fees_collected == 23
        assert state.total_consolidations == 7
        assert state.total_fees_consolidated == 77

    def test_signed_timestamp_positive(self) -> None:
        state = decode_pool_state(build_pool_bytes(last_consolidation=1_700_000_000))
        assert state.last_consolidation_timestamp == 1_700_000_000

    def test_signed_timestamp_negative(self) -> None:
        state = decode_pool_state(build_pool_bytes(last_consolidation=-1))
        assert state.last_consolidation_timestamp == -1

    def test_signed_timestamp_min(self) -> None:
        state = decode_pool_state(build_pool_bytes(last_consolidation=-(2**63)))
        assert state.last_consolidation_timestamp == -(2**63)

    def test_flags_low_bits(self) -> None:
        state = decode_pool_state(build_pool_bytes(flags=0b00000011))
        assert state.flags == 3
        assert state.flags_decoded.one_to_many_ratio is True
        assert state.flags_decoded.liquidity_paused is True
        assert state.flags_decoded.swaps_paused is False
        assert state.flags_decoded.withdrawal_protection is False
        assert state.flags_decoded.single_lp_token_mode is False
        assert state.flags_decoded.swap_owner_only is False

    def test_trailing_bytes_ignored(self) -> None:
        plain = decode_pool_state(build_pool_bytes())
        padded = decode_pool_state(build_pool_bytes(trailing=b"\xaa" * 64))
        assert plain == padded

    def test_deterministic(self) -> None:
        data = build_pool_bytes(flags=0x2A)
        assert decode_pool_state(data) == decode_pool_state(data)

    def test_accepts_bytearray(self) -> None:
        data = build_pool_bytes()
        assert decode_pool_state(bytearray(data)) == decode_pool_state(data)

    @pytest.mark.parametrize("size", [0, 100, 170, 357])
    def test_truncated_buffer_raises(self, size: int) -> None:
        with pytest.raises(PoolDecodeError, match="Truncated"):
            decode_pool_state(build_pool_bytes()[:size])

    def test_rejects_non_bytes(self) -> None:
        with pytest.raises(PoolDecodeError):
            decode_pool_state("AAAA")  # type: ignore[arg-type]

    def test_offsets(self) -> None:
        data = bytearray(build_pool_bytes())
        # flags at 261, i64 timestamp at 334
        data[261] = 0b0100_0000
        data[334:342] = struct.pack("<q", -42)
        state = decode_pool_state(bytes(data))
        assert state.flags_decoded.exact_exchange_required is True
        assert state.last_consolidation_timestamp == -42


class TestDecodeFlags:
    def test_each_bit(self) -> None:
        names = [
            "one_to_many_ratio",
            "liquidity_paused",
            "swaps_paused",
            "withdrawal_protection",
            "single_lp_token_mode",
            "swap_owner_only",
            "exact_exchange_required",
        ]
        for bit, name in enumerate(names):
            decoded = decode_flags(1 << bit)
            assert getattr(decoded, name) is True
            assert sum(getattr(decoded, n) for n in names) == 1

    def test_zero(self) -> None:
        decoded = decode_flags(0)
        assert not any(vars(decoded).values())

    def test_out_of_range(self) -> None:
        with pytest.raises(PoolDecodeError):
            decode_flags(256)


class TestParsedPoolData:
    def test_from_domain(self) -> None:
        state = decode_pool_state(build_pool_bytes(flags=0b11))
        parsed = ParsedPoolData.from_domain(POOL_ADDRESS, state)
        doc = parsed.model_dump()
        assert doc["address"] == POOL_ADDRESS
        assert doc["flags_decoded"]["one_to_many_ratio"] is True
        assert doc["flags_decoded"]["swaps_paused"] is False
        assert doc["token_a_ticker"] is None
        assert doc["ratio_a_actual"] is None
