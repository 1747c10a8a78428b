"""Type definitions and data models for the FIVA SDK."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum, IntEnum
from typing import Any

from pytoniq_core import Address

from .exceptions import ValidationError


class FivaAsset(IntEnum):
    """Assets a user can swap between.

    SY is the pool's internal accounting unit and is never a swap endpoint.
    """

    UNDERLYING = 0
    PT = 1
    YT = 2


class PoolType(Enum):
    """Pool curve families; they differ in the ``get_pool_config`` layout."""

    CONST_PRODUCT = "const_product"
    CURVE_STABLE = "curve_stable"
    CUBE_STABLE = "cube_stable"


class AddressKind(Enum):
    """Every dependent contract address the client can resolve."""

    YT_MINTER = "yt_minter"
    PT_MINTER = "pt_minter"
    POOL = "pool"
    ASSET_MINTER = "asset_minter"
    USER_ASSET_WALLET = "user_asset_wallet"
    USER_SY_WALLET = "user_sy_wallet"
    USER_PT_WALLET = "user_pt_wallet"
    USER_YT_WALLET = "user_yt_wallet"
    USER_LP_WALLET = "user_lp_wallet"
    POOL_SY_WALLET = "pool_sy_wallet"
    POOL_PT_WALLET = "pool_pt_wallet"
    POOL_YT_WALLET = "pool_yt_wallet"


Amount = int  # Non-negative integer in the native units of its precision domain
QueryId = int  # 64-bit message correlation id


@dataclass
class ContractAddresses:
    """Lazily filled address book rooted at the SY minter.

    Optional fields are write-once: assigning a different address to an
    already resolved field raises ``ValidationError``.
    """

    sy_minter: Address
    yt_minter: Address | None = None
    pt_minter: Address | None = None
    pool: Address | None = None
    asset_minter: Address | None = None
    user_asset_wallet: Address | None = None
    user_sy_wallet: Address | None = None
    user_pt_wallet: Address | None = None
    user_yt_wallet: Address | None = None
    user_lp_wallet: Address | None = None
    pool_sy_wallet: Address | None = None
    pool_pt_wallet: Address | None = None
    pool_yt_wallet: Address | None = None

    def get(self, kind: AddressKind) -> Address | None:
        return getattr(self, kind.value)

    def set(self, kind: AddressKind, address: Address) -> None:
        current = self.get(kind)
        if current is not None:
            if current != address:
                raise ValidationError(
                    f"Address for {kind.value} is already resolved",
                    field=kind.value,
                    value=address,
                    details={"current": current.to_str()},
                )
            return
        setattr(self, kind.value, address)

    def resolved(self) -> dict[str, Address]:
        """Return every field that currently holds an address."""

        return {
            item.name: getattr(self, item.name)
            for item in fields(self)
            if getattr(self, item.name) is not None
        }


@dataclass(frozen=True)
class FeeEstimate:
    """Nanotons to attach to a message and to forward with its payload."""

    value: int
    fwd_value: int


@dataclass(frozen=True)
class PoolConfig:
    """Decoded ``get_pool_config`` result."""

    owner: Address | None
    maintainer: Address | None
    protocol_fee: int
    lp_fee: int
    ref_fee: int
    fee_divider: int
    fee_treasury: Address | None
    index: int | None = None
    expected_index: int | None = None
    index_updater: Address | None = None
    amplification_coefficient: int | None = None

    @property
    def is_rebasing(self) -> bool:
        return bool(self.index)


@dataclass(frozen=True)
class PoolBalances:
    lp_amount: int
    sy_amount: int
    pt_amount: int


@dataclass(frozen=True)
class PoolJettonAddresses:
    """Pool-owned jetton wallets plus the minters the pool reports."""

    sy_wallet: Address
    pt_wallet: Address
    yt_wallet: Address
    yt_minter: Address
    sy_minter: Address | None = None


@dataclass(frozen=True)
class MintOut:
    yt_amount: int
    pt_amount: int


@dataclass(frozen=True)
class RedeemOut:
    sy_amount: int
    max_sy_available: int


@dataclass(frozen=True)
class ClaimableInterest:
    interest: int
    protocol_fee: int


@dataclass(frozen=True)
class TotalSupply:
    max_total_supply: int
    total_supply: int


@dataclass(frozen=True)
class WalletData:
    """Decoded ``get_wallet_data`` result of a jetton wallet."""

    balance: int
    owner: Address | None
    minter: Address | None


@dataclass(frozen=True)
class TransactionMessage:
    """One outgoing internal message as handed to the wallet."""

    address: str
    amount: int
    payload: str

    def as_dict(self) -> dict[str, str]:
        return {"address": self.address, "amount": str(self.amount), "payload": self.payload}


@dataclass(frozen=True)
class TransactionRequest:
    """A wallet-level submission of one or more independent messages.

    All messages share ``valid_until``. They are separate contract calls on
    chain: one may succeed while another bounces.
    """

    valid_until: int
    messages: list[TransactionMessage] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        """Return the request in TonConnect ``sendTransaction`` shape."""

        return {
            "validUntil": self.valid_until,
            "messages": [message.as_dict() for message in self.messages],
        }
