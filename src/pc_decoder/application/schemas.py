"""Pydantic schema for the decoded pool record (`parsed_pool_data`).

Keys are snake_case versions of the on-chain field names. Token fields at
the bottom are filled from token metadata when it is available and stay
null otherwise.
"""

from dataclasses import asdict

from pydantic import BaseModel

from src.pc_decoder.domain.models import PoolState


class FlagsDecoded(BaseModel):
    one_to_many_ratio: bool
    liquidity_paused: bool
    swaps_paused: bool
    withdrawal_protection: bool
    single_lp_token_mode: bool
    swap_owner_only: bool
    exact_exchange_required: bool


class ParsedPoolData(BaseModel):
    address: str

    owner: str
    token_a_mint: str
    token_b_mint: str
    token_a_vault: str
    token_b_vault: str
    lp_token_a_mint: str
    lp_token_b_mint: str

    ratio_a_numerator: int
    ratio_b_denominator: int
    total_token_a_liquidity: int
    total_token_b_liquidity: int

    pool_authority_bump_seed: int
    token_a_vault_bump_seed: int
    token_b_vault_bump_seed: int
    lp_token_a_mint_bump_seed: int
    lp_token_b_mint_bump_seed: int

    flags: int
    flags_decoded: FlagsDecoded

    contract_liquidity_fee: int
    swap_contract_fee: int
    collected_fees_token_a: int
    collected_fees_token_b: int
    total_fees_withdrawn_token_a: int
    total_fees_withdrawn_token_b: int
    collected_liquidity_fees: int
    collected_swap_contract_fees: int
    total_sol_fees_collected: int

    last_consolidation_timestamp: int
    total_consolidations: int
    total_fees_consolidated: int

    # Token metadata enrichment
    token_a_ticker: str | None = None
    token_b_ticker: str | None = None
    token_a_name: str | None = None
    token_b_name: str | None = None
    ratio_a_decimal: int | None = None
    ratio_b_decimal: int | None = None
    ratio_a_actual: float | None = None
    ratio_b_actual: float | None = None

    @classmethod
    def from_domain(cls, address: str, state: PoolState) -> "ParsedPoolData":
        return cls(address=address, **asdict(state))
