"""Lazy, memoized resolution of the contract addresses a FIVA market depends on."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import Enum

from pytoniq_core import Address

from ..exceptions import GetMethodError
from ..retry import RetryExecutor
from ..types import AddressKind, ContractAddresses
from .connections import GetMethodProvider
from .contracts import JettonMaster, JettonWallet, Pool, SYMinter, YTMinter

logger = logging.getLogger(__name__)


class ResolutionState(Enum):
    UNRESOLVED = "unresolved"
    RESOLVING = "resolving"
    RESOLVED = "resolved"
    FAILED = "failed"


# Kinds filled together by a single fetch; each group owns one lock.
RESOLUTION_GROUPS: tuple[tuple[AddressKind, ...], ...] = (
    (AddressKind.YT_MINTER,),
    (AddressKind.PT_MINTER,),
    (AddressKind.POOL,),
    (AddressKind.ASSET_MINTER,),
    (AddressKind.USER_ASSET_WALLET,),
    (AddressKind.USER_SY_WALLET,),
    (AddressKind.USER_PT_WALLET,),
    (AddressKind.USER_YT_WALLET,),
    (AddressKind.USER_LP_WALLET,),
    (AddressKind.POOL_SY_WALLET, AddressKind.POOL_PT_WALLET, AddressKind.POOL_YT_WALLET),
)

_GROUP_OF: dict[AddressKind, tuple[AddressKind, ...]] = {
    kind: group for group in RESOLUTION_GROUPS for kind in group
}

Resolved = dict[AddressKind, Address]


class AddressResolver:
    """Resolve dependent addresses from the SY minter and the connected account.

    Every address is fetched at most once per client. Concurrent requests for
    an unresolved group wait on the group's lock and reuse the first caller's
    result. A failed fetch leaves the group unset so the next call retries.
    """

    def __init__(
        self,
        sy_minter: Address,
        user_address: Address,
        provider: GetMethodProvider,
        executor: RetryExecutor,
    ) -> None:
        self._user = user_address
        self._provider = provider
        self._execute = executor
        self._addresses = ContractAddresses(sy_minter=sy_minter)
        self._states = {kind: ResolutionState.UNRESOLVED for kind in AddressKind}
        self._locks = {group: asyncio.Lock() for group in RESOLUTION_GROUPS}
        self._fetchers: dict[tuple[AddressKind, ...], Callable[[], Awaitable[Resolved]]] = {
            (AddressKind.YT_MINTER,): self._fetch_yt_minter,
            (AddressKind.PT_MINTER,): self._fetch_pt_minter,
            (AddressKind.POOL,): self._fetch_pool,
            (AddressKind.ASSET_MINTER,): self._fetch_asset_minter,
            (AddressKind.USER_ASSET_WALLET,): self._fetch_user_asset_wallet,
            (AddressKind.USER_SY_WALLET,): self._fetch_user_sy_wallet,
            (AddressKind.USER_PT_WALLET,): self._fetch_user_pt_wallet,
            (AddressKind.USER_YT_WALLET,): self._fetch_user_yt_wallet,
            (AddressKind.USER_LP_WALLET,): self._fetch_user_lp_wallet,
            _GROUP_OF[AddressKind.POOL_SY_WALLET]: self._fetch_pool_wallets,
        }

    @property
    def sy_minter(self) -> Address:
        return self._addresses.sy_minter

    @property
    def user_address(self) -> Address:
        return self._user

    @property
    def addresses(self) -> ContractAddresses:
        return self._addresses

    def state(self, kind: AddressKind) -> ResolutionState:
        return self._states[kind]

    async def resolve(self, kind: AddressKind) -> Address:
        cached = self._addresses.get(kind)
        if cached is not None:
            return cached

        group = _GROUP_OF[kind]
        async with self._locks[group]:
            cached = self._addresses.get(kind)
            if cached is not None:
                return cached

            self._mark(group, ResolutionState.RESOLVING)
            try:
                resolved = await self._fetchers[group]()
            except BaseException:
                self._mark(group, ResolutionState.FAILED)
                raise

            for member, address in resolved.items():
                self._addresses.set(member, address)
                self._states[member] = ResolutionState.RESOLVED
                logger.debug("Resolved %s -> %s", member.value, address.to_str())

        return resolved[kind]

    async def resolve_many(self, *kinds: AddressKind) -> list[Address]:
        return [await self.resolve(kind) for kind in kinds]

    def _mark(self, group: tuple[AddressKind, ...], state: ResolutionState) -> None:
        for member in group:
            if self._addresses.get(member) is None:
                self._states[member] = state

    # ------------------------------------------------------------------
    # Group fetchers
    # ------------------------------------------------------------------
    def _sy(self) -> SYMinter:
        return SYMinter(self._addresses.sy_minter, self._provider)

    async def _fetch_yt_minter(self) -> Resolved:
        address = await self._execute(self._sy().get_yt_minter_address)
        return {AddressKind.YT_MINTER: address}

    async def _fetch_pt_minter(self) -> Resolved:
        yt_minter = YTMinter(await self.resolve(AddressKind.YT_MINTER), self._provider)
        address = await self._execute(yt_minter.get_pt_minter_address)
        return {AddressKind.PT_MINTER: address}

    async def _fetch_pool(self) -> Resolved:
        address = await self._execute(self._sy().get_pool_address)
        return {AddressKind.POOL: address}

    async def _fetch_asset_minter(self) -> Resolved:
        # the SY minter reports its own underlying wallet; that wallet names the minter
        underlying_wallet = await self._execute(self._sy().get_underlying_address)
        data = await self._execute(JettonWallet(underlying_wallet, self._provider).get_wallet_data)
        if data.minter is None:
            raise GetMethodError(
                "Underlying wallet reported no minter",
                address=underlying_wallet.to_str(),
                method="get_wallet_data",
            )
        return {AddressKind.ASSET_MINTER: data.minter}

    async def _fetch_user_asset_wallet(self) -> Resolved:
        minter = JettonMaster(await self.resolve(AddressKind.ASSET_MINTER), self._provider)
        address = await self._execute(minter.get_wallet_address, self._user)
        return {AddressKind.USER_ASSET_WALLET: address}

    async def _fetch_user_sy_wallet(self) -> Resolved:
        address = await self._execute(self._sy().get_wallet_address, self._user)
        return {AddressKind.USER_SY_WALLET: address}

    async def _fetch_user_pt_wallet(self) -> Resolved:
        minter = JettonMaster(await self.resolve(AddressKind.PT_MINTER), self._provider)
        address = await self._execute(minter.get_wallet_address, self._user)
        return {AddressKind.USER_PT_WALLET: address}

    async def _fetch_user_yt_wallet(self) -> Resolved:
        minter = YTMinter(await self.resolve(AddressKind.YT_MINTER), self._provider)
        address = await self._execute(minter.get_wallet_address, self._user)
        return {AddressKind.USER_YT_WALLET: address}

    async def _fetch_user_lp_wallet(self) -> Resolved:
        pool = Pool(await self.resolve(AddressKind.POOL), self._provider)
        address = await self._execute(pool.get_lp_wallet_address, self._user)
        return {AddressKind.USER_LP_WALLET: address}

    async def _fetch_pool_wallets(self) -> Resolved:
        pool = Pool(await self.resolve(AddressKind.POOL), self._provider)
        jettons = await self._execute(pool.get_jetton_addresses)
        return {
            AddressKind.POOL_SY_WALLET: jettons.sy_wallet,
            AddressKind.POOL_PT_WALLET: jettons.pt_wallet,
            AddressKind.POOL_YT_WALLET: jettons.yt_wallet,
        }
