"""Fixed-layout pool account decoder.

The account has no framing: every field sits at a fixed offset agreed with
the on-chain program, so the order and widths below must never change.

  offset  size  field
  0       7x32  owner, token_a_mint, token_b_mint, token_a_vault,
                token_b_vault, lp_token_a_mint, lp_token_b_mint
  224     4x8   ratio_a_numerator, ratio_b_denominator,
                total_token_a_liquidity, total_token_b_liquidity   (u64)
  256     5x1   five bump seeds                                     (u8)
  261     1     flags                                               (u8)
  262     9x8   contract/swap fees, token fee tracking, SOL fees    (u64)
  334     8     last_consolidation_timestamp                        (i64)
  342     2x8   total_consolidations, total_fees_consolidated       (u64)
  358           end

All integers are little-endian. Bytes past the end are ignored.
"""

from src.pc_common.errors import PoolDecodeError
from src.pc_decoder.domain.base58 import b58encode
from src.pc_decoder.domain.models import PoolFlags, PoolState

PUBKEY = "pubkey"
U64 = "u64"
I64 = "i64"
U8 = "u8"

_WIDTHS = {PUBKEY: 32, U64: 8, I64: 8, U8: 1}

POOL_STATE_LAYOUT: tuple[tuple[str, str], ...] = (
    ("owner", PUBKEY),
    ("token_a_mint", PUBKEY),
    ("token_b_mint", PUBKEY),
    ("token_a_vault", PUBKEY),
    ("token_b_vault", PUBKEY),
    ("lp_token_a_mint", PUBKEY),
    ("lp_token_b_mint", PUBKEY),
    ("ratio_a_numerator", U64),
    ("ratio_b_denominator", U64),
    ("total_token_a_liquidity", U64),
    ("total_token_b_liquidity", U64),
    ("pool_authority_bump_seed", U8),
    ("token_a_vault_bump_seed", U8),
    ("token_b_vault_bump_seed", U8),
    ("lp_token_a_mint_bump_seed", U8),
    ("lp_token_b_mint_bump_seed", U8),
    ("flags", U8),
    ("contract_liquidity_fee", U64),
    ("swap_contract_fee", U64),
    ("collected_fees_token_a", U64),
    ("collected_fees_token_b", U64),
    ("total_fees_withdrawn_token_a", U64),
    ("total_fees_withdrawn_token_b", U64),
    ("collected_liquidity_fees", U64),
    ("collected_swap_contract_fees", U64),
    ("total_sol_fees_collected", U64),
    ("last_consolidation_timestamp", I64),
    ("total_consolidations", U64),
    ("total_fees_consolidated", U64),
)

POOL_STATE_SIZE = sum(_WIDTHS[kind] for _, kind in POOL_STATE_LAYOUT)

FLAG_BITS: tuple[tuple[str, int], ...] = (
    ("one_to_many_ratio", 0),
    ("liquidity_paused", 1),
    ("swaps_paused", 2),
    ("withdrawal_protection", 3),
    ("single_lp_token_mode", 4),
    ("swap_owner_only", 5),
    ("exact_exchange_required", 6),
)


class _Reader:
    """Sequential little-endian cursor over a byte buffer."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self.offset = 0

    def _take(self, size: int, field: str) -> bytes:
        end = self.offset + size
        if end > len(self._data):
            raise PoolDecodeError(
                f"Truncated pool data: {field} needs bytes {self.offset}..{end}, "
                f"buffer has {len(self._data)}"
            )
        chunk = self._data[self.offset:end]
        self.offset = end
        return chunk

    def pubkey(self, field: str) -> str:
        return b58encode(self._take(32, field))

    def u64(self, field: str) -> int:
        return int.from_bytes(self._take(8, field), "little")

    def i64(self, field: str) -> int:
        value = int.from_bytes(self._take(8, field), "little")
        if value >= 1 << 63:
            value -= 1 << 64
        return value

    def u8(self, field: str) -> int:
        return self._take(1, field)[0]


def decode_flags(flags: int) -> PoolFlags:
    if not 0 <= flags <= 0xFF:
        raise PoolDecodeError(f"Flags value out of byte range: {flags}")
    return PoolFlags(**{name: bool(flags & (1 << bit)) for name, bit in FLAG_BITS})


def decode_pool_state(data: bytes) -> PoolState:
    """Decode a pool account buffer.

    Raises PoolDecodeError if the buffer is shorter than POOL_STATE_SIZE.
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise PoolDecodeError(f"Expected bytes, got {type(data).__name__}")
    data = bytes(data)
    if len(data) < POOL_STATE_SIZE:
        raise PoolDecodeError(
            f"Truncated pool data: expected at least {POOL_STATE_SIZE} bytes, got {len(data)}"
        )

    reader = _Reader(data)
    readers = {PUBKEY: reader.pubkey, U64: reader.u64, I64: reader.i64, U8: reader.u8}
    fields = {name: readers[kind](name) for name, kind in POOL_STATE_LAYOUT}

    return PoolState(**fields, flags_decoded=decode_flags(fields["flags"]))
