"""Get-method wrappers for the FIVA contracts.

Each wrapper pairs a contract address with a ``GetMethodProvider`` and
decodes the result stack in the field order the contract returns it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pytoniq_core import Address

from ..exceptions import GetMethodError
from ..types import (
    ClaimableInterest,
    FeeEstimate,
    MintOut,
    PoolBalances,
    PoolConfig,
    PoolJettonAddresses,
    PoolType,
    RedeemOut,
    TotalSupply,
    WalletData,
)
from .connections import GetMethodProvider, StackArg, StackReader, address_slice

logger = logging.getLogger(__name__)


class ContractHandle:
    """Address plus provider; base for all get-method wrappers."""

    def __init__(self, address: Address, provider: GetMethodProvider) -> None:
        self.address = address
        self._provider = provider

    async def _get(self, method: str, stack: Sequence[StackArg] = ()) -> StackReader:
        items = await self._provider.run_get_method(self.address, method, stack)
        return StackReader(items, method=method)

    def _required_address(self, reader: StackReader, field: str) -> Address:
        address = reader.read_address()
        if address is None:
            raise GetMethodError(
                f"Contract returned an empty {field} address",
                address=self.address.to_str(),
                details={"field": field},
            )
        return address

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.address.to_str()})"


class JettonMaster(ContractHandle):
    """Any TEP-74 jetton minter."""

    async def get_wallet_address(self, owner: Address) -> Address:
        reader = await self._get("get_wallet_address", [address_slice(owner)])
        return self._required_address(reader, "wallet")


class JettonWallet(ContractHandle):
    async def get_wallet_data(self) -> WalletData:
        reader = await self._get("get_wallet_data")
        return WalletData(
            balance=reader.read_int(),
            owner=reader.read_address(),
            minter=reader.read_address(),
        )

    async def get_balance(self) -> int:
        return (await self.get_wallet_data()).balance


class YTWallet(JettonWallet):
    """YT holder wallet; tracks the index at the holder's last interest collection."""

    async def get_last_collected_interest_index(self) -> int:
        reader = await self._get("get_last_collected_interest_index")
        return reader.read_int()

    async def get_acquired_amount(self) -> int:
        reader = await self._get("get_acquired_amount")
        return reader.read_int()


class SYMinter(JettonMaster):
    async def get_underlying_address(self) -> Address:
        reader = await self._get("get_underlying_address")
        return self._required_address(reader, "underlying")

    async def get_pool_address(self) -> Address:
        reader = await self._get("get_pool_address")
        return self._required_address(reader, "pool")

    async def get_yt_minter_address(self) -> Address:
        reader = await self._get("get_yt_minter_address")
        return self._required_address(reader, "yt_minter")

    async def get_max_total_supply(self) -> TotalSupply:
        reader = await self._get("get_max_total_supply")
        return TotalSupply(max_total_supply=reader.read_int(), total_supply=reader.read_int())

    async def get_gas_estimation(self, op: int) -> FeeEstimate:
        reader = await self._get("get_gas_estimation", [int(op)])
        return FeeEstimate(value=reader.read_int(), fwd_value=reader.read_int())

    async def get_index(self) -> int:
        """Current SY index, or 0 when the SY wraps a non-rebasing asset."""

        try:
            reader = await self._get("get_index")
        except GetMethodError as exc:
            logger.debug("get_index unavailable on %s: %s", self, exc)
            return 0
        return reader.read_int()

    async def get_underlying_precision(self) -> int:
        reader = await self._get("get_underlying_precision")
        return reader.read_int()


class YTMinter(JettonMaster):
    async def get_jetton_addresses(self) -> tuple[Address, Address, Address]:
        """Return ``(sy_wallet, pt_minter, pt_wallet)`` packed in a single cell."""

        reader = await self._get("get_jetton_addresses")
        cs = reader.read_cell().begin_parse()
        return cs.load_address(), cs.load_address(), cs.load_address()

    async def get_pt_minter_address(self) -> Address:
        _, pt_minter, _ = await self.get_jetton_addresses()
        if pt_minter is None:
            raise GetMethodError(
                "YT minter returned an empty PT minter address",
                address=self.address.to_str(),
                method="get_jetton_addresses",
            )
        return pt_minter

    async def get_index(self) -> tuple[int, int]:
        """Return ``(index, index_update_timestamp)``."""

        reader = await self._get("get_index")
        return reader.read_int(), reader.read_int()

    async def get_maturity(self) -> int:
        """Maturity as a unix timestamp in seconds."""

        reader = await self._get("get_maturity")
        return reader.read_int()

    async def get_pt_total_supply(self) -> int:
        reader = await self._get("get_pt_total_supply")
        return reader.read_int()

    async def get_mint_yt_pt_out(self, sy_amount: int) -> MintOut:
        reader = await self._get("get_mint_yt_pt_out", [sy_amount])
        return MintOut(yt_amount=reader.read_int(), pt_amount=reader.read_int())

    async def get_redeem_sy_out_before_maturity(self, yt_amount: int, pt_amount: int) -> RedeemOut:
        reader = await self._get("get_redeem_sy_out_before_maturity", [yt_amount, pt_amount])
        return RedeemOut(sy_amount=reader.read_int(), max_sy_available=reader.read_int())

    async def get_redeem_sy_out_after_maturity(self, pt_amount: int) -> RedeemOut:
        reader = await self._get("get_redeem_sy_out_after_maturity", [pt_amount])
        return RedeemOut(sy_amount=reader.read_int(), max_sy_available=reader.read_int())

    async def get_claimable_interest(
        self, yt_amount: int, last_collected_index: int, acquired_amount: int
    ) -> ClaimableInterest:
        reader = await self._get(
            "get_claimable_interest", [yt_amount, last_collected_index, acquired_amount]
        )
        return ClaimableInterest(interest=reader.read_int(), protocol_fee=reader.read_int())


class Pool(ContractHandle):
    def __init__(
        self,
        address: Address,
        provider: GetMethodProvider,
        pool_type: PoolType = PoolType.CUBE_STABLE,
    ) -> None:
        super().__init__(address, provider)
        self.pool_type = pool_type

    async def get_lp_wallet_address(self, owner: Address) -> Address:
        reader = await self._get("get_wallet_address", [address_slice(owner)])
        return self._required_address(reader, "lp_wallet")

    async def get_pool_balances(self) -> PoolBalances:
        reader = await self._get("get_pool_balances")
        return PoolBalances(
            lp_amount=reader.read_int(),
            sy_amount=reader.read_int(),
            pt_amount=reader.read_int(),
        )

    async def get_expected_swap_amount_out(
        self, from_wallet: Address, to_wallet: Address, amount_in: int
    ) -> int:
        reader = await self._get(
            "get_expected_swap_amount_out",
            [address_slice(from_wallet), address_slice(to_wallet), amount_in],
        )
        return reader.read_int()

    async def get_lp_out(self, sy_amount: int, pt_amount: int) -> int:
        reader = await self._get("get_lp_out", [sy_amount, pt_amount])
        return reader.read_int()

    async def get_sy_pt_out(self, lp_amount: int) -> tuple[int, int]:
        reader = await self._get("get_sy_pt_out", [lp_amount])
        return reader.read_int(), reader.read_int()

    async def get_fee_estimation(self, op: int) -> FeeEstimate:
        reader = await self._get("get_fee_estimation", [int(op), 0])
        return FeeEstimate(value=reader.read_int(), fwd_value=reader.read_int())

    async def get_version(self) -> int:
        reader = await self._get("get_version")
        return reader.read_int()

    async def get_jetton_addresses(self) -> PoolJettonAddresses:
        reader = await self._get("get_jetton_addresses")
        sy_wallet = self._required_address(reader, "sy_wallet")
        pt_wallet = self._required_address(reader, "pt_wallet")
        yt_wallet = self._required_address(reader, "yt_wallet")
        yt_minter = self._required_address(reader, "yt_minter")
        # older pools do not report the SY minter
        sy_minter = reader.read_address() if reader.remaining else None
        return PoolJettonAddresses(
            sy_wallet=sy_wallet,
            pt_wallet=pt_wallet,
            yt_wallet=yt_wallet,
            yt_minter=yt_minter,
            sy_minter=sy_minter,
        )

    async def get_pool_config(self) -> PoolConfig:
        reader = await self._get("get_pool_config")
        owner = reader.read_address()
        maintainer = reader.read_address()
        protocol_fee = reader.read_int()
        lp_fee = reader.read_int()
        ref_fee = reader.read_int()
        fee_divider = reader.read_int()
        fee_treasury = reader.read_address()

        if self.pool_type is PoolType.CURVE_STABLE:
            return PoolConfig(
                owner=owner,
                maintainer=maintainer,
                protocol_fee=protocol_fee,
                lp_fee=lp_fee,
                ref_fee=ref_fee,
                fee_divider=fee_divider,
                fee_treasury=fee_treasury,
                amplification_coefficient=reader.read_int(),
            )

        return PoolConfig(
            owner=owner,
            maintainer=maintainer,
            protocol_fee=protocol_fee,
            lp_fee=lp_fee,
            ref_fee=ref_fee,
            fee_divider=fee_divider,
            fee_treasury=fee_treasury,
            index=reader.read_int(),
            expected_index=reader.read_int(),
            index_updater=reader.read_address(),
        )
