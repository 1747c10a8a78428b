"""Tests for fiva_sdk.types utilities."""

import pytest
from conftest import make_address

from fiva_sdk.exceptions import ValidationError
from fiva_sdk.types import (
    AddressKind,
    ContractAddresses,
    FivaAsset,
    TransactionMessage,
    TransactionRequest,
)


def test_address_kinds_match_address_book_fields() -> None:
    book = ContractAddresses(sy_minter=make_address(1))
    for kind in AddressKind:
        assert book.get(kind) is None


def test_address_book_set_and_resolved() -> None:
    sy_minter = make_address(1)
    pool = make_address(2)
    book = ContractAddresses(sy_minter=sy_minter)

    book.set(AddressKind.POOL, pool)

    assert book.pool == pool
    assert book.resolved() == {"sy_minter": sy_minter, "pool": pool}


def test_address_book_is_write_once() -> None:
    book = ContractAddresses(sy_minter=make_address(1))
    book.set(AddressKind.YT_MINTER, make_address(2))
    book.set(AddressKind.YT_MINTER, make_address(2))

    with pytest.raises(ValidationError) as excinfo:
        book.set(AddressKind.YT_MINTER, make_address(3))
    assert excinfo.value.field == "yt_minter"


def test_fiva_asset_excludes_sy() -> None:
    assert [asset.name for asset in FivaAsset] == ["UNDERLYING", "PT", "YT"]


def test_transaction_request_shape() -> None:
    request = TransactionRequest(
        valid_until=1_700_000_300,
        messages=[TransactionMessage(address="EQabc", amount=10, payload="te6")],
    )

    assert request.as_dict() == {
        "validUntil": 1_700_000_300,
        "messages": [{"address": "EQabc", "amount": "10", "payload": "te6"}],
    }
