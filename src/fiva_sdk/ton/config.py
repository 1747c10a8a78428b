"""Configuration containers for the FIVA TON client."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from ..retry import DEFAULT_RETRY_POLICY, RetryPolicy

TONCENTER_MAINNET_URL = "https://toncenter.com/api/v3"
TONCENTER_TESTNET_URL = "https://testnet.toncenter.com/api/v3"

DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_TTL = 5 * 60.0


@dataclass(frozen=True)
class FivaClientConfig:
    """Aggregated configuration used to construct the FIVA client."""

    sy_minter_address: str
    rpc_url: str | None = None
    api_key: str | None = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    ttl: float = DEFAULT_TTL
    testnet: bool = False
    retry: RetryPolicy = field(default=DEFAULT_RETRY_POLICY)

    def with_defaulted_urls(self) -> FivaClientConfig:
        """Return a copy with the toncenter endpoint chosen from the network flag."""

        if self.rpc_url is None:
            rpc_url = TONCENTER_TESTNET_URL if self.testnet else TONCENTER_MAINNET_URL
        else:
            rpc_url = self.rpc_url.rstrip("/")

        return replace(self, rpc_url=rpc_url)
