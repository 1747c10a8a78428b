"""Wire-exact message bodies for FIVA contracts.

Each body is a frozen dataclass bound to one operation code. ``to_cell``
writes the 32-bit op code followed by the operation's fields in the order
the on-chain decoder reads them. Changing an order or a width here is a
protocol change.
"""

from __future__ import annotations

import base64
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from pytoniq_core import Address, Builder, Cell, begin_cell

from ..constants import JettonOp, PoolOp, SYOp

OP_BITS = 32
QUERY_ID_BITS = 64


@dataclass(frozen=True)
class MessageBody(ABC):
    op: ClassVar[int]

    def to_cell(self) -> Cell:
        builder = begin_cell().store_uint(self.op, OP_BITS)
        return self.store_fields(builder).end_cell()

    @abstractmethod
    def store_fields(self, builder: Builder) -> Builder: ...


# ----------------------------------------------------------------------
# Jetton wallet messages
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class JettonTransfer(MessageBody):
    """``transfer`` sent to the holder's own jetton wallet."""

    op: ClassVar[int] = JettonOp.TRANSFER

    amount: int
    destination: Address
    response_address: Address
    forward_ton_amount: int
    forward_payload: ForwardPayload | Cell | None = None
    custom_payload: Cell | None = None
    query_id: int = 0

    def store_fields(self, builder: Builder) -> Builder:
        return (
            builder.store_uint(self.query_id, QUERY_ID_BITS)
            .store_coins(self.amount)
            .store_address(self.destination)
            .store_address(self.response_address)
            .store_maybe_ref(self.custom_payload)
            .store_coins(self.forward_ton_amount)
            .store_maybe_ref(_as_cell(self.forward_payload))
        )


@dataclass(frozen=True)
class JettonBurn(MessageBody):
    op: ClassVar[int] = JettonOp.BURN

    amount: int
    response_address: Address
    custom_payload: MessageBody | Cell | None = None
    query_id: int = 0

    def store_fields(self, builder: Builder) -> Builder:
        return (
            builder.store_uint(self.query_id, QUERY_ID_BITS)
            .store_coins(self.amount)
            .store_address(self.response_address)
            .store_maybe_ref(_as_cell(self.custom_payload))
        )


# ----------------------------------------------------------------------
# Forward payloads (carried inside a jetton transfer)
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class WrapAndSwapToPT(MessageBody):
    op: ClassVar[int] = SYOp.WRAP_AND_SWAP_SY_FOR_PT

    receiver: Address
    min_out: int = 0

    def store_fields(self, builder: Builder) -> Builder:
        return builder.store_address(self.receiver).store_coins(self.min_out)


@dataclass(frozen=True)
class WrapAndSwapToYT(MessageBody):
    op: ClassVar[int] = SYOp.WRAP_AND_SWAP_SY_FOR_YT

    receiver: Address
    min_out: int = 0

    def store_fields(self, builder: Builder) -> Builder:
        return builder.store_address(self.receiver).store_coins(self.min_out)


@dataclass(frozen=True)
class SwapPTForUnderlying(MessageBody):
    op: ClassVar[int] = SYOp.SWAP_PT_FOR_SY_AND_UNWRAP

    receiver: Address
    min_out: int = 0
    query_id: int = 0

    def store_fields(self, builder: Builder) -> Builder:
        return (
            builder.store_uint(self.query_id, QUERY_ID_BITS)
            .store_address(self.receiver)
            .store_coins(self.min_out)
        )


@dataclass(frozen=True)
class SwapYTForUnderlying(MessageBody):
    op: ClassVar[int] = SYOp.SWAP_YT_FOR_SY_AND_UNWRAP

    receiver: Address
    min_out: int = 0
    query_id: int = 0

    def store_fields(self, builder: Builder) -> Builder:
        return (
            builder.store_uint(self.query_id, QUERY_ID_BITS)
            .store_address(self.receiver)
            .store_coins(self.min_out)
        )


@dataclass(frozen=True)
class WrapAndMintPTYT(MessageBody):
    op: ClassVar[int] = SYOp.WRAP_AND_MINT_PT_YT

    receiver: Address

    def store_fields(self, builder: Builder) -> Builder:
        return builder.store_address(self.receiver)


@dataclass(frozen=True)
class WrapAndAddLiquidity(MessageBody):
    op: ClassVar[int] = SYOp.WRAP_AND_ADD_LIQUIDITY

    receiver: Address
    min_lp_out: int = 0

    def store_fields(self, builder: Builder) -> Builder:
        return builder.store_address(self.receiver).store_coins(self.min_lp_out)


@dataclass(frozen=True)
class AddLiquidity(MessageBody):
    op: ClassVar[int] = PoolOp.ADD_LIQUIDITY

    receiver: Address
    min_lp_out: int = 0
    query_id: int = 0

    def store_fields(self, builder: Builder) -> Builder:
        # trailing flag bit is always set
        return (
            builder.store_uint(self.query_id, QUERY_ID_BITS)
            .store_address(self.receiver)
            .store_coins(self.min_lp_out)
            .store_uint(1, 1)
        )


@dataclass(frozen=True)
class Redeem(MessageBody):
    """Burn PT and/or YT before maturity and unwrap the SY."""

    op: ClassVar[int] = SYOp.REDEEM_AND_UNWRAP

    response_address: Address
    query_id: int = 0

    def store_fields(self, builder: Builder) -> Builder:
        return (
            builder.store_uint(self.query_id, QUERY_ID_BITS)
            .store_address(self.response_address)
            .store_coins(0)
        )


@dataclass(frozen=True)
class RedeemAfterMaturity(MessageBody):
    op: ClassVar[int] = SYOp.REDEEM_AFTER_MATURITY_AND_UNWRAP

    response_address: Address
    query_id: int = 0

    def store_fields(self, builder: Builder) -> Builder:
        return (
            builder.store_uint(self.query_id, QUERY_ID_BITS)
            .store_address(self.response_address)
            .store_coins(0)
        )


# ----------------------------------------------------------------------
# Direct messages
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class ClaimInterestAndUnwrap(MessageBody):
    """Sent straight to the holder's YT wallet, not wrapped in a transfer."""

    op: ClassVar[int] = SYOp.CLAIM_INTEREST_AND_UNWRAP

    recipient: Address
    query_id: int = 0

    def store_fields(self, builder: Builder) -> Builder:
        return builder.store_uint(self.query_id, QUERY_ID_BITS).store_address(self.recipient)


@dataclass(frozen=True)
class RedeemLP(MessageBody):
    """Custom payload of an LP burn."""

    op: ClassVar[int] = PoolOp.REDEEM_LP

    def store_fields(self, builder: Builder) -> Builder:
        return builder


ForwardPayload = (
    WrapAndSwapToPT
    | WrapAndSwapToYT
    | SwapPTForUnderlying
    | SwapYTForUnderlying
    | WrapAndMintPTYT
    | WrapAndAddLiquidity
    | AddLiquidity
    | Redeem
    | RedeemAfterMaturity
)
Payload = JettonTransfer | JettonBurn | ClaimInterestAndUnwrap | RedeemLP | ForwardPayload


def _as_cell(body: MessageBody | Cell | None) -> Cell | None:
    if body is None or isinstance(body, Cell):
        return body
    return body.to_cell()


def empty_cell() -> Cell:
    return begin_cell().end_cell()


def encode_payload(body: MessageBody | Cell) -> str:
    """Serialize a message body to the base64 BOC a wallet expects."""

    cell = body if isinstance(body, Cell) else body.to_cell()
    return base64.b64encode(cell.to_boc()).decode("ascii")
