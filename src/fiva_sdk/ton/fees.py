"""Operation fee estimation."""

from __future__ import annotations

import logging

from ..retry import RetryExecutor
from ..types import AddressKind, FeeEstimate
from .connections import GetMethodProvider
from .contracts import Pool, SYMinter
from .resolver import AddressResolver

logger = logging.getLogger(__name__)


class FeeEstimator:
    """Query the attached and forwarded TON amounts an operation needs.

    Estimates are read fresh on every call since gas prices and contract
    state change between submissions.
    """

    def __init__(
        self,
        resolver: AddressResolver,
        provider: GetMethodProvider,
        executor: RetryExecutor,
    ) -> None:
        self._resolver = resolver
        self._provider = provider
        self._execute = executor

    async def estimate(self, op: int) -> FeeEstimate:
        sy_minter = SYMinter(self._resolver.sy_minter, self._provider)
        fee = await self._execute(sy_minter.get_gas_estimation, op)
        logger.debug("Fee estimate for op=%#010x: %s", op, fee)
        return fee

    async def estimate_pool(self, op: int) -> FeeEstimate:
        pool = Pool(await self._resolver.resolve(AddressKind.POOL), self._provider)
        fee = await self._execute(pool.get_fee_estimation, op)
        logger.debug("Pool fee estimate for op=%#010x: %s", op, fee)
        return fee
