"""Connection helpers for the FIVA TON client."""

from __future__ import annotations

import asyncio
import base64
import logging
from collections.abc import Mapping, Sequence
from typing import Any, Protocol

import requests
from pytoniq_core import Address, Cell, Slice, begin_cell

from ..exceptions import GetMethodError, NetworkError
from .config import FivaClientConfig

logger = logging.getLogger(__name__)

StackArg = int | Cell
StackValue = int | Cell | Slice | Address | None


class GetMethodProvider(Protocol):
    """Read-only access to contract get-methods."""

    async def run_get_method(
        self, address: Address, method: str, stack: Sequence[StackArg] = ()
    ) -> list[StackValue]: ...


class WalletAccount(Protocol):
    address: str


class WalletConnector(Protocol):
    """The slice of a TonConnect-style connector the client relies on."""

    connected: bool
    account: WalletAccount | None

    async def send_transaction(self, request: Mapping[str, Any]) -> Any: ...


def address_slice(address: Address) -> Cell:
    """Wrap an address in a cell, the form get-methods take slice arguments in."""

    return begin_cell().store_address(address).end_cell()


class StackReader:
    """Sequential typed reader over a get-method result stack."""

    def __init__(self, items: Sequence[StackValue], *, method: str = "") -> None:
        self._items = list(items)
        self._position = 0
        self._method = method

    @property
    def remaining(self) -> int:
        return len(self._items) - self._position

    def _next(self, expected: str) -> StackValue:
        if self._position >= len(self._items):
            raise GetMethodError(
                f"Stack exhausted while reading {expected}",
                method=self._method,
                details={"position": self._position},
            )
        value = self._items[self._position]
        self._position += 1
        return value

    def read_int(self) -> int:
        value = self._next("int")
        if isinstance(value, bool) or not isinstance(value, int):
            raise GetMethodError(
                "Expected an integer stack entry",
                method=self._method,
                details={"position": self._position - 1, "type": type(value).__name__},
            )
        return value

    def read_bool(self) -> bool:
        return self.read_int() != 0

    def read_cell(self) -> Cell:
        value = self._next("cell")
        if isinstance(value, Slice):
            return value.to_cell()
        if not isinstance(value, Cell):
            raise GetMethodError(
                "Expected a cell stack entry",
                method=self._method,
                details={"position": self._position - 1, "type": type(value).__name__},
            )
        return value

    def read_address(self) -> Address | None:
        value = self._next("address")
        if value is None or isinstance(value, Address):
            return value
        if isinstance(value, Cell):
            return value.begin_parse().load_address()
        if isinstance(value, Slice):
            return value.load_address()
        raise GetMethodError(
            "Expected an address stack entry",
            method=self._method,
            details={"position": self._position - 1, "type": type(value).__name__},
        )


class ToncenterProvider:
    """Run get-methods through the toncenter v3 HTTP API."""

    def __init__(self, config: FivaClientConfig, session: requests.Session | None = None) -> None:
        self._config = config.with_defaulted_urls()
        self._session = session or requests.Session()
        if self._config.api_key:
            self._session.headers["X-API-Key"] = self._config.api_key

    @property
    def endpoint(self) -> str:
        return f"{self._config.rpc_url}/runGetMethod"

    async def run_get_method(
        self, address: Address, method: str, stack: Sequence[StackArg] = ()
    ) -> list[StackValue]:
        body = {
            "address": address.to_str(),
            "method": method,
            "stack": [self._encode_arg(arg) for arg in stack],
        }
        logger.debug("runGetMethod %s on %s", method, body["address"])
        payload = await asyncio.to_thread(self._post, body)

        exit_code = payload.get("exit_code", 0) if isinstance(payload, Mapping) else None
        if exit_code is None:
            raise GetMethodError(
                "Unexpected response format from runGetMethod",
                address=body["address"],
                method=method,
                details={"response": payload},
            )
        if exit_code not in (0, 1):
            raise GetMethodError(
                f"Get-method {method} failed with exit code {exit_code}",
                address=body["address"],
                method=method,
                exit_code=exit_code,
            )

        return [self._decode_entry(entry, method) for entry in payload.get("stack") or []]

    def close(self) -> None:
        self._session.close()

    def _post(self, body: Mapping[str, Any]) -> Any:
        try:
            response = self._session.post(
                self.endpoint,
                json=body,
                timeout=self._config.request_timeout,
            )
        except requests.RequestException as exc:
            raise NetworkError(
                "Failed to reach TON RPC endpoint",
                endpoint=self.endpoint,
                details={"method": body.get("method"), "error": str(exc)},
            ) from exc

        if response.status_code >= 400:
            raise NetworkError(
                f"TON RPC endpoint returned HTTP {response.status_code}",
                endpoint=self.endpoint,
                status_code=response.status_code,
                details={"method": body.get("method"), "body": response.text[:500]},
            )

        try:
            return response.json()
        except ValueError as exc:
            raise NetworkError(
                "TON RPC endpoint returned invalid JSON",
                endpoint=self.endpoint,
                status_code=response.status_code,
            ) from exc

    @staticmethod
    def _encode_arg(arg: StackArg) -> dict[str, str]:
        if isinstance(arg, Cell):
            return {"type": "slice", "value": base64.b64encode(arg.to_boc()).decode("ascii")}
        return {"type": "num", "value": hex(arg)}

    @staticmethod
    def _decode_entry(entry: Any, method: str) -> StackValue:
        if not isinstance(entry, Mapping):
            raise GetMethodError(
                "Malformed stack entry", method=method, details={"entry": entry}
            )

        kind = entry.get("type")
        value = entry.get("value")
        if kind == "num":
            return int(str(value), 16)
        if kind in ("cell", "slice"):
            cell = Cell.one_from_boc(base64.b64decode(str(value)))
            return cell if kind == "cell" else cell.begin_parse()
        if kind == "null":
            return None

        raise GetMethodError(
            f"Unsupported stack entry type {kind!r}", method=method, details={"entry": entry}
        )
