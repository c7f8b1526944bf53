"""Domain models for pc_decoder — pure dataclasses, no business logic."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PoolFlags:
    """Named bits of the pool flags byte."""

    one_to_many_ratio: bool          # bit 0
    liquidity_paused: bool           # bit 1
    swaps_paused: bool               # bit 2
    withdrawal_protection: bool      # bit 3
    single_lp_token_mode: bool       # bit 4
    swap_owner_only: bool            # bit 5
    exact_exchange_required: bool    # bit 6


@dataclass(frozen=True)
class PoolState:
    """Decoded pool account. Field order is the on-chain layout order."""

    # Pubkeys (base-58)
    owner: str
    token_a_mint: str
    token_b_mint: str
    token_a_vault: str
    token_b_vault: str
    lp_token_a_mint: str
    lp_token_b_mint: str

    # Ratio and liquidity (raw units)
    ratio_a_numerator: int
    ratio_b_denominator: int
    total_token_a_liquidity: int
    total_token_b_liquidity: int

    # PDA bump seeds
    pool_authority_bump_seed: int
    token_a_vault_bump_seed: int
    token_b_vault_bump_seed: int
    lp_token_a_mint_bump_seed: int
    lp_token_b_mint_bump_seed: int

    flags: int

    # Contract fees (lamports)
    contract_liquidity_fee: int
    swap_contract_fee: int

    # Token fee tracking
    collected_fees_token_a: int
    collected_fees_token_b: int
    total_fees_withdrawn_token_a: int
    total_fees_withdrawn_token_b: int

    # SOL fee tracking
    collected_liquidity_fees: int
    collected_swap_contract_fees: int
    total_sol_fees_collected: int

    # Consolidation
    last_consolidation_timestamp: int
    total_consolidations: int
    total_fees_consolidated: int

    flags_decoded: PoolFlags
