"""FIVA protocol base interface."""

from abc import ABC, abstractmethod

from .types import FivaAsset


class FivaProtocolBase(ABC):
    """FIVA protocol interface."""

    @abstractmethod
    async def swap(
        self,
        from_asset: FivaAsset,
        to_asset: FivaAsset,
        amount: int,
        *,
        min_amount_out: int = 0,
        query_id: int | None = None,
        recipient: str | None = None,
    ) -> None:
        pass

    @abstractmethod
    async def mint_pt_and_yt(
        self, amount: int, *, query_id: int | None = None, recipient: str | None = None
    ) -> None:
        pass

    @abstractmethod
    async def redeem_pt(
        self, amount: int, *, query_id: int | None = None, recipient: str | None = None
    ) -> None:
        pass

    @abstractmethod
    async def redeem_yt(
        self, amount: int, *, query_id: int | None = None, recipient: str | None = None
    ) -> None:
        pass

    @abstractmethod
    async def redeem_batch(
        self,
        pt_amount: int,
        yt_amount: int,
        *,
        query_id: int | None = None,
        recipient: str | None = None,
    ) -> None:
        pass

    @abstractmethod
    async def redeem_after_maturity(
        self, amount: int, *, query_id: int | None = None, recipient: str | None = None
    ) -> None:
        pass

    @abstractmethod
    async def add_asset_liquidity(
        self,
        amount: int,
        *,
        min_lp_out: int = 0,
        query_id: int | None = None,
        recipient: str | None = None,
    ) -> None:
        pass

    @abstractmethod
    async def add_pt_liquidity(
        self,
        amount: int,
        *,
        min_lp_out: int = 0,
        query_id: int | None = None,
        recipient: str | None = None,
    ) -> None:
        pass

    @abstractmethod
    async def add_liquidity_batch(
        self,
        asset_amount: int,
        pt_amount: int,
        *,
        min_lp_out: int = 0,
        query_id: int | None = None,
        recipient: str | None = None,
    ) -> None:
        pass

    @abstractmethod
    async def redeem_liquidity(
        self, lp_amount: int, *, query_id: int | None = None, recipient: str | None = None
    ) -> None:
        pass

    @abstractmethod
    async def claim_interest(
        self, *, query_id: int | None = None, recipient: str | None = None
    ) -> None:
        pass

    @abstractmethod
    async def get_fixed_apy(self) -> float:
        pass

    @abstractmethod
    async def get_gain(self, amount: int) -> float:
        pass

    @abstractmethod
    def is_connected(self) -> bool:
        pass
