from __future__ import annotations

import base64
import zlib

import pytest
from pytoniq_core import Cell, Slice, begin_cell

from fiva_sdk.constants import JettonOp, PoolOp, SYOp, op_code
from fiva_sdk.ton.messages import (
    AddLiquidity,
    ClaimInterestAndUnwrap,
    JettonBurn,
    JettonTransfer,
    Redeem,
    RedeemAfterMaturity,
    RedeemLP,
    SwapPTForUnderlying,
    SwapYTForUnderlying,
    WrapAndAddLiquidity,
    WrapAndMintPTYT,
    WrapAndSwapToPT,
    WrapAndSwapToYT,
    empty_cell,
    encode_payload,
)

from conftest import make_address

RECEIVER = make_address(0xAA)
RESPONSE = make_address(0xBB)
DESTINATION = make_address(0xCC)


def _load_maybe_ref(cs: Slice) -> Cell | None:
    return cs.load_ref() if cs.load_uint(1) else None


class TestOpCodes:
    @pytest.mark.parametrize("member", list(SYOp) + list(PoolOp), ids=lambda m: m.name)
    def test_codes_are_crc32_of_names(self, member):
        name = member.name.lower()
        assert member == zlib.crc32(name.encode()) & 0xFFFFFFFF

    def test_known_values(self):
        assert JettonOp.TRANSFER == 0x0F8A7EA5
        assert JettonOp.BURN == 0x595F07BC
        assert op_code("add_liquidity") == SYOp.ADD_LIQUIDITY == PoolOp.ADD_LIQUIDITY


class TestJettonMessages:
    def test_transfer_layout(self):
        forward = WrapAndSwapToPT(RECEIVER, min_out=5)
        cell = JettonTransfer(
            amount=1_000,
            destination=DESTINATION,
            response_address=RESPONSE,
            forward_ton_amount=150_000_000,
            forward_payload=forward,
            query_id=77,
        ).to_cell()

        cs = cell.begin_parse()
        assert cs.load_uint(32) == JettonOp.TRANSFER
        assert cs.load_uint(64) == 77
        assert cs.load_coins() == 1_000
        assert cs.load_address() == DESTINATION
        assert cs.load_address() == RESPONSE
        assert _load_maybe_ref(cs) is None
        assert cs.load_coins() == 150_000_000
        nested = _load_maybe_ref(cs)
        assert nested is not None
        assert nested.hash == forward.to_cell().hash

    def test_transfer_with_empty_custom_payload(self):
        cell = JettonTransfer(
            amount=1,
            destination=DESTINATION,
            response_address=RESPONSE,
            forward_ton_amount=0,
            forward_payload=WrapAndMintPTYT(RECEIVER),
            custom_payload=empty_cell(),
        ).to_cell()

        cs = cell.begin_parse()
        cs.load_uint(32 + 64)
        cs.load_coins()
        cs.load_address()
        cs.load_address()
        custom = _load_maybe_ref(cs)
        assert custom is not None
        assert custom.hash == empty_cell().hash

    def test_burn_layout_with_redeem_lp_payload(self):
        cell = JettonBurn(
            amount=500, response_address=RESPONSE, custom_payload=RedeemLP(), query_id=9
        ).to_cell()

        cs = cell.begin_parse()
        assert cs.load_uint(32) == JettonOp.BURN
        assert cs.load_uint(64) == 9
        assert cs.load_coins() == 500
        assert cs.load_address() == RESPONSE
        custom = _load_maybe_ref(cs)
        assert custom is not None
        assert custom.begin_parse().load_uint(32) == PoolOp.REDEEM_LP


class TestForwardPayloads:
    @pytest.mark.parametrize(
        ("body", "op"),
        [
            (WrapAndSwapToPT(RECEIVER, 11), SYOp.WRAP_AND_SWAP_SY_FOR_PT),
            (WrapAndSwapToYT(RECEIVER, 11), SYOp.WRAP_AND_SWAP_SY_FOR_YT),
            (WrapAndAddLiquidity(RECEIVER, 11), SYOp.WRAP_AND_ADD_LIQUIDITY),
        ],
    )
    def test_wrap_payloads(self, body, op):
        cs = body.to_cell().begin_parse()
        assert cs.load_uint(32) == op
        assert cs.load_address() == RECEIVER
        assert cs.load_coins() == 11

    @pytest.mark.parametrize(
        ("cls", "op"),
        [
            (SwapPTForUnderlying, SYOp.SWAP_PT_FOR_SY_AND_UNWRAP),
            (SwapYTForUnderlying, SYOp.SWAP_YT_FOR_SY_AND_UNWRAP),
        ],
    )
    def test_unwrap_swaps(self, cls, op):
        cs = cls(RECEIVER, min_out=3, query_id=12).to_cell().begin_parse()
        assert cs.load_uint(32) == op
        assert cs.load_uint(64) == 12
        assert cs.load_address() == RECEIVER
        assert cs.load_coins() == 3

    def test_mint_carries_only_receiver(self):
        expected = (
            begin_cell().store_uint(SYOp.WRAP_AND_MINT_PT_YT, 32).store_address(RECEIVER).end_cell()
        )
        assert WrapAndMintPTYT(RECEIVER).to_cell().hash == expected.hash

    def test_add_liquidity_sets_trailing_flag(self):
        cs = AddLiquidity(RECEIVER, min_lp_out=4, query_id=8).to_cell().begin_parse()
        assert cs.load_uint(32) == PoolOp.ADD_LIQUIDITY
        assert cs.load_uint(64) == 8
        assert cs.load_address() == RECEIVER
        assert cs.load_coins() == 4
        assert cs.load_uint(1) == 1

    @pytest.mark.parametrize(
        ("cls", "op"),
        [
            (Redeem, SYOp.REDEEM_AND_UNWRAP),
            (RedeemAfterMaturity, SYOp.REDEEM_AFTER_MATURITY_AND_UNWRAP),
        ],
    )
    def test_redeem_payloads(self, cls, op):
        cs = cls(RESPONSE, query_id=5).to_cell().begin_parse()
        assert cs.load_uint(32) == op
        assert cs.load_uint(64) == 5
        assert cs.load_address() == RESPONSE
        assert cs.load_coins() == 0

    def test_claim_interest(self):
        cs = ClaimInterestAndUnwrap(RECEIVER, query_id=3).to_cell().begin_parse()
        assert cs.load_uint(32) == SYOp.CLAIM_INTEREST_AND_UNWRAP
        assert cs.load_uint(64) == 3
        assert cs.load_address() == RECEIVER


class TestEncoding:
    def test_encode_payload_is_base64_boc(self):
        body = ClaimInterestAndUnwrap(RECEIVER, query_id=1)
        decoded = Cell.one_from_boc(base64.b64decode(encode_payload(body)))
        assert decoded.hash == body.to_cell().hash

    def test_encode_accepts_raw_cell(self):
        cell = begin_cell().store_uint(7, 8).end_cell()
        assert Cell.one_from_boc(base64.b64decode(encode_payload(cell))).hash == cell.hash

    def test_builders_are_pure(self):
        body = WrapAndSwapToYT(RECEIVER, 1)
        assert body.to_cell().hash == body.to_cell().hash
        assert body == WrapAndSwapToYT(RECEIVER, 1)
