"""Claim the interest accrued on held YT."""

import asyncio
import logging
import os

from connector import get_wallet
from dotenv import load_dotenv

from fiva_sdk import FivaClient, to_user_representation

load_dotenv()

SY_MINTER = os.getenv("FIVA_SY_MINTER", "EQDi9blCcyT-k8iMpFMYY0t7mHVyiCB50ZsRgyUECJDuGvIl")
FIVA_JETTON_DECIMALS = 9


async def main():
    logging.basicConfig(level=logging.INFO)

    wallet = await get_wallet()
    client = FivaClient(wallet, SY_MINTER, api_key=os.getenv("TONCENTER_API_KEY"))

    claimable = await client.get_claimable_interest()
    print(f"{to_user_representation(claimable.interest, FIVA_JETTON_DECIMALS)} SY can be claimed")

    await client.claim_interest()
    client.close()


if __name__ == "__main__":
    asyncio.run(main())
