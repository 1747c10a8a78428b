"""Mint PT and YT from the underlying asset and redeem them back."""

import asyncio
import logging
import os

from connector import get_wallet
from dotenv import load_dotenv

from fiva_sdk import FivaClient, to_user_representation

load_dotenv()

SY_MINTER = os.getenv("FIVA_SY_MINTER", "EQDi9blCcyT-k8iMpFMYY0t7mHVyiCB50ZsRgyUECJDuGvIl")
USDT_DECIMALS = 6
FIVA_JETTON_DECIMALS = 9


async def main():
    logging.basicConfig(level=logging.INFO)

    wallet = await get_wallet()
    client = FivaClient(wallet, SY_MINTER, api_key=os.getenv("TONCENTER_API_KEY"))

    # Mint PT and YT from 1 USDT
    usdt_amount = 1_000_000
    sy_amount = await client.underlying_to_sy(usdt_amount)
    expected = await client.get_mint_pt_yt_out(sy_amount)
    print(
        f"Minting 1 USDT yields {to_user_representation(expected.pt_amount, FIVA_JETTON_DECIMALS)}"
        " PT and YT"
    )
    await client.mint_pt_and_yt(usdt_amount)

    sy_out = await client.get_redeem_sy_out_before_maturity(10**9, 10**9)
    usdt_out = await client.sy_to_underlying(sy_out)
    print(f"Redeeming 1 PT and 1 YT returns {to_user_representation(usdt_out, USDT_DECIMALS)} USDT")

    # Redeem in two separate requests
    await client.redeem_pt(10**9)
    await client.redeem_yt(10**9)

    # Or both messages in one request; some wallets (Ledger) do not support batches
    await client.redeem_batch(10**9, 10**9)

    print(f"Maturity: {await client.get_maturity_date():%Y-%m-%d}")
    client.close()


if __name__ == "__main__":
    asyncio.run(main())
