"""Provide liquidity to the FIVA pool and withdraw it."""

import asyncio
import logging
import os

from connector import get_wallet
from dotenv import load_dotenv

from fiva_sdk import FivaClient

load_dotenv()

SY_MINTER = os.getenv("FIVA_SY_MINTER", "EQDi9blCcyT-k8iMpFMYY0t7mHVyiCB50ZsRgyUECJDuGvIl")


async def main():
    logging.basicConfig(level=logging.INFO)

    wallet = await get_wallet()
    client = FivaClient(wallet, SY_MINTER, api_key=os.getenv("TONCENTER_API_KEY"))

    balances = await client.get_pool_balances()
    print(f"Pool holds {balances.sy_amount} SY and {balances.pt_amount} PT")

    # Pool balance ratio decides how much PT to pair with 1 USDT
    usdt_amount = 1_000_000
    sy_amount = await client.underlying_to_sy(usdt_amount)
    pt_amount = sy_amount * balances.pt_amount // balances.sy_amount

    lp_out = await client.get_expected_lp_out(sy_amount, pt_amount)
    min_lp_out = lp_out * 99 // 100
    print(f"Expected LP tokens: {lp_out}")

    await client.add_liquidity_batch(usdt_amount, pt_amount, min_lp_out=min_lp_out)

    lp_balance = await client.get_lp_balance()
    if lp_balance:
        await client.redeem_liquidity(lp_balance)

    client.close()


if __name__ == "__main__":
    asyncio.run(main())
