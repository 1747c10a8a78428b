"""Swap between the underlying asset, PT and YT."""

import asyncio
import logging
import os

from connector import get_wallet
from dotenv import load_dotenv

from fiva_sdk import FivaAsset, FivaClient, to_user_representation

load_dotenv()

# Evaa USDT market
SY_MINTER = os.getenv("FIVA_SY_MINTER", "EQDi9blCcyT-k8iMpFMYY0t7mHVyiCB50ZsRgyUECJDuGvIl")
USDT_DECIMALS = 6
FIVA_JETTON_DECIMALS = 9


def with_slippage(amount: int, percent: int = 1) -> int:
    return amount * (100 - percent) // 100


async def main():
    logging.basicConfig(level=logging.INFO)

    wallet = await get_wallet()
    client = FivaClient(wallet, SY_MINTER, api_key=os.getenv("TONCENTER_API_KEY"))

    # Swap 1 USDT for PT
    pt_out = await client.get_expected_swap_amount_out(
        FivaAsset.UNDERLYING, FivaAsset.PT, 1_000_000
    )
    print(f"1 USDT -> {to_user_representation(pt_out, FIVA_JETTON_DECIMALS)} PT")
    await client.swap_underlying_for_pt(1_000_000, min_amount_out=with_slippage(pt_out))

    # Swap 1 USDT for YT
    yt_out = await client.get_expected_swap_amount_out(
        FivaAsset.UNDERLYING, FivaAsset.YT, 1_000_000
    )
    print(f"1 USDT -> {to_user_representation(yt_out, FIVA_JETTON_DECIMALS)} YT")
    await client.swap_underlying_for_yt(1_000_000, min_amount_out=with_slippage(yt_out))

    # Swap 1 PT back to USDT
    usdt_out = await client.get_expected_swap_amount_out(FivaAsset.PT, FivaAsset.UNDERLYING, 10**9)
    print(f"1 PT -> {to_user_representation(usdt_out, USDT_DECIMALS)} USDT")
    await client.swap(
        FivaAsset.PT, FivaAsset.UNDERLYING, 10**9, min_amount_out=with_slippage(usdt_out)
    )

    print(f"Fixed APY: {await client.get_fixed_apy():.2f}%")
    client.close()


if __name__ == "__main__":
    asyncio.run(main())
