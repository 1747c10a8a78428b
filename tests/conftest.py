from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from types import SimpleNamespace
from typing import Any

import pytest
from pytoniq_core import Address, begin_cell

from fiva_sdk.exceptions import GetMethodError
from fiva_sdk.retry import RetryExecutor, RetryPolicy
from fiva_sdk.ton.client import FivaClient

NOW = 1_700_000_000.0

GAS_ESTIMATION = (200_000_000, 150_000_000)
POOL_FEE_ESTIMATION = (300_000_000, 250_000_000)


def make_address(n: int) -> Address:
    return Address(f"0:{n:064x}")


def raw(address: Address) -> str:
    return address.to_str(is_user_friendly=False)


class FakeProvider:
    """In-memory get-method provider keyed by (raw address, method)."""

    def __init__(self) -> None:
        self.responses: dict[tuple[str, str], Any] = {}
        self.failures: dict[tuple[str, str], list[Exception]] = {}
        self.calls: list[tuple[str, str, tuple[Any, ...]]] = []
        self.delay = 0.0

    def set(
        self, address: Address, method: str, result: Sequence[Any] | Callable[..., Any]
    ) -> None:
        self.responses[(raw(address), method)] = result

    def fail(self, address: Address, method: str, *errors: Exception) -> None:
        self.failures.setdefault((raw(address), method), []).extend(errors)

    def count(self, address: Address, method: str) -> int:
        key = raw(address)
        return sum(1 for call in self.calls if call[0] == key and call[1] == method)

    async def run_get_method(
        self, address: Address, method: str, stack: Sequence[Any] = ()
    ) -> list[Any]:
        key = (raw(address), method)
        self.calls.append((key[0], method, tuple(stack)))
        if self.delay:
            await asyncio.sleep(self.delay)

        pending = self.failures.get(key)
        if pending:
            raise pending.pop(0)

        if key not in self.responses:
            raise GetMethodError(
                f"{method} not available", address=key[0], method=method, exit_code=11
            )
        result = self.responses[key]
        if callable(result):
            return list(result(*stack))
        return list(result)


class FakeConnector:
    """Records wallet requests instead of signing them."""

    def __init__(
        self,
        address: Address | None = None,
        *,
        connected: bool = True,
        error: Exception | None = None,
    ) -> None:
        self.connected = connected
        self.account = SimpleNamespace(address=address.to_str()) if address is not None else None
        self.error = error
        self.requests: list[dict[str, Any]] = []

    async def send_transaction(self, request: dict[str, Any]) -> dict[str, str]:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return {"boc": "signed"}


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def market() -> SimpleNamespace:
    return SimpleNamespace(
        sy_minter=make_address(0x01),
        yt_minter=make_address(0x02),
        pt_minter=make_address(0x03),
        pool=make_address(0x04),
        underlying_wallet=make_address(0x05),
        asset_minter=make_address(0x06),
        yt_minter_sy_wallet=make_address(0x07),
        yt_minter_pt_wallet=make_address(0x08),
        user=make_address(0x10),
        user_asset_wallet=make_address(0x11),
        user_sy_wallet=make_address(0x12),
        user_pt_wallet=make_address(0x13),
        user_yt_wallet=make_address(0x14),
        user_lp_wallet=make_address(0x15),
        pool_sy_wallet=make_address(0x21),
        pool_pt_wallet=make_address(0x22),
        pool_yt_wallet=make_address(0x23),
    )


@pytest.fixture
def provider(market: SimpleNamespace) -> FakeProvider:
    fake = FakeProvider()

    fake.set(market.sy_minter, "get_yt_minter_address", [market.yt_minter])
    fake.set(market.sy_minter, "get_pool_address", [market.pool])
    fake.set(market.sy_minter, "get_underlying_address", [market.underlying_wallet])
    fake.set(market.sy_minter, "get_wallet_address", [market.user_sy_wallet])
    fake.set(market.sy_minter, "get_gas_estimation", lambda op: list(GAS_ESTIMATION))
    fake.set(market.sy_minter, "get_underlying_precision", [6])
    fake.set(market.sy_minter, "get_max_total_supply", [10**18, 5 * 10**15])

    fake.set(
        market.underlying_wallet,
        "get_wallet_data",
        [123, market.sy_minter, market.asset_minter, begin_cell().end_cell()],
    )
    fake.set(market.asset_minter, "get_wallet_address", [market.user_asset_wallet])

    jetton_cell = (
        begin_cell()
        .store_address(market.yt_minter_sy_wallet)
        .store_address(market.pt_minter)
        .store_address(market.yt_minter_pt_wallet)
        .end_cell()
    )
    fake.set(market.yt_minter, "get_jetton_addresses", [jetton_cell])
    fake.set(market.yt_minter, "get_wallet_address", [market.user_yt_wallet])
    fake.set(market.pt_minter, "get_wallet_address", [market.user_pt_wallet])

    fake.set(market.pool, "get_wallet_address", [market.user_lp_wallet])
    fake.set(
        market.pool,
        "get_jetton_addresses",
        [
            market.pool_sy_wallet,
            market.pool_pt_wallet,
            market.pool_yt_wallet,
            market.yt_minter,
            market.sy_minter,
        ],
    )
    fake.set(market.pool, "get_fee_estimation", lambda op, reserved: list(POOL_FEE_ESTIMATION))
    return fake


@pytest.fixture
def connector(market: SimpleNamespace) -> FakeConnector:
    return FakeConnector(market.user)


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def executor(sleep: RecordingSleep) -> RetryExecutor:
    return RetryExecutor(RetryPolicy(max_attempts=3, delay=0.5), sleep=sleep)


@pytest.fixture
def client(
    provider: FakeProvider,
    connector: FakeConnector,
    market: SimpleNamespace,
    sleep: RecordingSleep,
) -> FivaClient:
    return FivaClient(
        connector,
        market.sy_minter.to_str(),
        provider=provider,
        retry_policy=RetryPolicy(max_attempts=3, delay=0.5),
        sleep=sleep,
        clock=lambda: NOW,
    )
