"""Constants and operation-code tables for the FIVA protocol."""

import zlib
from enum import IntEnum

# Precision domains
SY_DECIMALS = 9
SY_PRECISION = 10**SY_DECIMALS
INDEX_DECIMALS = 6
INDEX_PRECISION = 10**INDEX_DECIMALS

USER_REPRESENTATION_DECIMALS = 3

SECONDS_PER_DAY = 86_400
DAYS_PER_YEAR = 365

MAX_QUERY_ID = 2**64 - 1


def op_code(name: str) -> int:
    """Return the 32-bit operation code for a human-readable operation name.

    Codes are the CRC-32 (IEEE) of the name, shared verbatim with the
    on-chain contracts.
    """
    return zlib.crc32(name.encode("utf-8")) & 0xFFFFFFFF


class JettonOp(IntEnum):
    """Standard jetton wallet operation codes."""

    TRANSFER = 0x0F8A7EA5
    BURN = 0x595F07BC


class SYOp(IntEnum):
    """Operation codes understood by the SY minter, YT minter and pool."""

    WRAP_AND_SWAP_SY_FOR_PT = op_code("wrap_and_swap_sy_for_pt")
    WRAP_AND_SWAP_SY_FOR_YT = op_code("wrap_and_swap_sy_for_yt")
    SWAP_PT_FOR_SY_AND_UNWRAP = op_code("swap_pt_for_sy_and_unwrap")
    SWAP_YT_FOR_SY_AND_UNWRAP = op_code("swap_yt_for_sy_and_unwrap")
    WRAP_AND_MINT_PT_YT = op_code("wrap_and_mint_pt_yt")
    REDEEM_AND_UNWRAP = op_code("redeem_and_unwrap")
    REDEEM_AFTER_MATURITY_AND_UNWRAP = op_code("redeem_after_maturity_and_unwrap")
    WRAP_AND_ADD_LIQUIDITY = op_code("wrap_and_add_liquidity")
    ADD_LIQUIDITY = op_code("add_liquidity")
    REDEEM_LP_AND_UNWRAP = op_code("redeem_lp_and_unwrap")
    CLAIM_INTEREST_AND_UNWRAP = op_code("claim_interest_and_unwrap")


class PoolOp(IntEnum):
    """Operation codes understood by the pool contract."""

    ADD_LIQUIDITY = op_code("add_liquidity")
    REDEEM_LP = op_code("redeem_lp")
