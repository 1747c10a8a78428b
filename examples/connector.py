"""TonConnect wallet connector shared by the examples."""

import asyncio
import os
from collections.abc import Mapping
from typing import Any

from pytonconnect import TonConnect
from pytonconnect.storage import FileStorage

MANIFEST_URL = (
    "https://raw.githubusercontent.com/Fiva-protocol/jettons-manifest/refs/heads/main/"
    "manifest/manifest.json"
)
DEFAULT_STORAGE_PATH = os.path.join(os.path.dirname(__file__), "temp", "ton-connect.json")


class TonConnectWallet:
    """Adapt a pytonconnect session to the connector interface FivaClient expects."""

    def __init__(self, connector: TonConnect) -> None:
        self._connector = connector

    @property
    def connected(self) -> bool:
        return self._connector.connected

    @property
    def account(self) -> Any:
        return self._connector.account

    async def send_transaction(self, request: Mapping[str, Any]) -> Any:
        # the TonConnect wire format uses snake_case for the deadline
        return await self._connector.send_transaction(
            {"valid_until": request["validUntil"], "messages": list(request["messages"])}
        )


async def get_wallet(
    storage_path: str = DEFAULT_STORAGE_PATH, wallet_name: str = "Tonkeeper"
) -> TonConnectWallet:
    """Restore a saved session or print a connection link and wait for approval."""

    os.makedirs(os.path.dirname(storage_path), exist_ok=True)
    connector = TonConnect(manifest_url=MANIFEST_URL, storage=FileStorage(storage_path))

    if await connector.restore_connection():
        return TonConnectWallet(connector)

    wallets = connector.get_wallets()
    wallet = next((item for item in wallets if item["name"] == wallet_name), wallets[0])
    url = await connector.connect(wallet)
    print(f"Open this link in {wallet['name']} to connect:\n{url}")

    for _ in range(300):
        await asyncio.sleep(1)
        if connector.connected:
            return TonConnectWallet(connector)

    raise TimeoutError("Wallet connection was not approved in time")
