"""FIVA client that builds protocol messages and submits them through a TON wallet."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import Any

from pytoniq_core import Address, Cell

from ..base import FivaProtocolBase
from ..constants import SECONDS_PER_DAY, PoolOp, SYOp
from ..exceptions import InvalidAssetPairError, UnresolvedAssetError, ValidationError
from ..retry import DEFAULT_RETRY_POLICY, RetryExecutor, RetryObserver, RetryPolicy
from ..types import (
    AddressKind,
    ClaimableInterest,
    FeeEstimate,
    FivaAsset,
    MintOut,
    PoolBalances,
    PoolConfig,
    PoolType,
    TotalSupply,
    TransactionMessage,
)
from ..utils import (
    fixed_apy,
    generate_query_id,
    percentage_gain,
    sy_to_underlying,
    underlying_to_sy,
    validate_query_id,
)
from .config import DEFAULT_REQUEST_TIMEOUT, DEFAULT_TTL, FivaClientConfig
from .connections import GetMethodProvider, ToncenterProvider, WalletConnector
from .contracts import JettonWallet, Pool, SYMinter, YTMinter, YTWallet
from .fees import FeeEstimator
from .messages import (
    AddLiquidity,
    ClaimInterestAndUnwrap,
    ForwardPayload,
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
)
from .resolver import AddressResolver
from .transactions import TransactionDispatcher

logger = logging.getLogger(__name__)

_POOL_WALLET_BY_ASSET = {
    FivaAsset.UNDERLYING: AddressKind.POOL_SY_WALLET,
    FivaAsset.PT: AddressKind.POOL_PT_WALLET,
    FivaAsset.YT: AddressKind.POOL_YT_WALLET,
}

_USER_WALLET_BY_ASSET = {
    FivaAsset.UNDERLYING: AddressKind.USER_ASSET_WALLET,
    FivaAsset.PT: AddressKind.USER_PT_WALLET,
    FivaAsset.YT: AddressKind.USER_YT_WALLET,
}

_TOKENIZED = frozenset({FivaAsset.PT, FivaAsset.YT})


def _parse_address(value: Address | str, field: str) -> Address:
    if isinstance(value, Address):
        return value
    try:
        return Address(value)
    except Exception as exc:
        raise ValidationError(
            "Invalid TON address", field=field, value=value, details={"error": str(exc)}
        ) from exc


def _check_amount(amount: int, field: str = "amount") -> int:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValidationError("Amount must be an integer", field=field, value=amount)
    if amount <= 0:
        raise ValidationError("Amount must be positive", field=field, value=amount)
    return amount


def _check_min_out(amount: int, field: str) -> int:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValidationError("Minimum output must be an integer", field=field, value=amount)
    if amount < 0:
        raise ValidationError("Minimum output cannot be negative", field=field, value=amount)
    return amount


class FivaClient(FivaProtocolBase):
    """Interact with one FIVA market, identified by its SY minter.

    Reads go through a ``GetMethodProvider`` (toncenter by default) and are
    retried; every state-changing operation is encoded locally and handed to
    the wallet connector, which signs and broadcasts it. Submitting a message
    does not mean it executed: the outcome is only visible on chain.
    """

    def __init__(
        self,
        connector: WalletConnector,
        sy_minter_address: str,
        *,
        provider: GetMethodProvider | None = None,
        rpc_url: str | None = None,
        api_key: str | None = None,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        ttl: float = DEFAULT_TTL,
        testnet: bool = False,
        pool_type: PoolType = PoolType.CUBE_STABLE,
        retry_policy: RetryPolicy | None = None,
        retry_observer: RetryObserver | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        clock: Callable[[], float] = time.time,
    ) -> None:
        account = getattr(connector, "account", None)
        if not getattr(connector, "connected", False) or account is None:
            raise ValidationError("provided connector is not connected", field="connector")

        config = FivaClientConfig(
            sy_minter_address=sy_minter_address,
            rpc_url=rpc_url,
            api_key=api_key,
            request_timeout=request_timeout,
            ttl=ttl,
            testnet=testnet,
            retry=retry_policy or DEFAULT_RETRY_POLICY,
        ).with_defaulted_urls()

        self._config = config
        self._connector = connector
        self._owns_provider = provider is None
        self._provider: GetMethodProvider = provider or ToncenterProvider(config)
        self._user = _parse_address(account.address, "account.address")
        self._execute = RetryExecutor(config.retry, observer=retry_observer, sleep=sleep)
        self._resolver = AddressResolver(
            _parse_address(sy_minter_address, "sy_minter_address"),
            self._user,
            self._provider,
            self._execute,
        )
        self._fees = FeeEstimator(self._resolver, self._provider, self._execute)
        self._dispatcher = TransactionDispatcher(connector, ttl=config.ttl, clock=clock)
        self._pool_type = pool_type
        self._clock = clock
        self._underlying_precision: int | None = None

    # ------------------------------------------------------------------
    # Connection management
    # ------------------------------------------------------------------
    @property
    def config(self) -> FivaClientConfig:
        return self._config

    @property
    def user_address(self) -> Address:
        return self._user

    @property
    def resolver(self) -> AddressResolver:
        return self._resolver

    def is_connected(self) -> bool:
        return bool(getattr(self._connector, "connected", False)) and (
            getattr(self._connector, "account", None) is not None
        )

    def close(self) -> None:
        if self._owns_provider and isinstance(self._provider, ToncenterProvider):
            self._provider.close()

    # ------------------------------------------------------------------
    # Contract addresses
    # ------------------------------------------------------------------
    def get_sy_minter_address(self) -> Address:
        return self._resolver.sy_minter

    async def get_address(self, kind: AddressKind) -> Address:
        return await self._resolver.resolve(kind)

    async def get_yt_minter_address(self) -> Address:
        return await self._resolver.resolve(AddressKind.YT_MINTER)

    async def get_pt_minter_address(self) -> Address:
        return await self._resolver.resolve(AddressKind.PT_MINTER)

    async def get_pool_address(self) -> Address:
        return await self._resolver.resolve(AddressKind.POOL)

    async def get_user_asset_wallet_address(self) -> Address:
        return await self._resolver.resolve(AddressKind.USER_ASSET_WALLET)

    async def get_user_pt_wallet_address(self) -> Address:
        return await self._resolver.resolve(AddressKind.USER_PT_WALLET)

    async def get_user_yt_wallet_address(self) -> Address:
        return await self._resolver.resolve(AddressKind.USER_YT_WALLET)

    async def get_user_lp_wallet_address(self) -> Address:
        return await self._resolver.resolve(AddressKind.USER_LP_WALLET)

    async def get_pool_wallet_addresses(self) -> dict[str, Address]:
        """Return the pool's own SY, PT and YT wallets."""

        sy_wallet, pt_wallet, yt_wallet = await self._resolver.resolve_many(
            AddressKind.POOL_SY_WALLET,
            AddressKind.POOL_PT_WALLET,
            AddressKind.POOL_YT_WALLET,
        )
        return {"sy": sy_wallet, "pt": pt_wallet, "yt": yt_wallet}

    # ------------------------------------------------------------------
    # Market reads
    # ------------------------------------------------------------------
    async def get_pool_balances(self) -> PoolBalances:
        pool = await self._pool()
        return await self._execute(pool.get_pool_balances)

    async def get_pool_config(self) -> PoolConfig:
        pool = await self._pool()
        return await self._execute(pool.get_pool_config)

    async def get_expected_lp_out(self, sy_amount: int, pt_amount: int) -> int:
        pool = await self._pool()
        return await self._execute(pool.get_lp_out, sy_amount, pt_amount)

    async def get_expected_sy_pt_out(self, lp_amount: int) -> tuple[int, int]:
        """SY and PT returned for burning ``lp_amount`` LP tokens."""

        pool = await self._pool()
        return await self._execute(pool.get_sy_pt_out, lp_amount)

    async def get_max_total_supply(self) -> TotalSupply:
        return await self._execute(self._sy_minter().get_max_total_supply)

    async def get_index(self) -> int:
        return await self._execute(self._sy_minter().get_index)

    async def get_underlying_precision(self) -> int:
        if self._underlying_precision is None:
            self._underlying_precision = await self._execute(
                self._sy_minter().get_underlying_precision
            )
        return self._underlying_precision

    async def get_fees_estimation(self, op: int) -> FeeEstimate:
        return await self._fees.estimate(op)

    async def get_mint_pt_yt_out(self, sy_amount: int) -> MintOut:
        yt_minter = await self._yt_minter()
        return await self._execute(yt_minter.get_mint_yt_pt_out, sy_amount)

    async def get_redeem_sy_out_before_maturity(self, yt_amount: int, pt_amount: int) -> int:
        yt_minter = await self._yt_minter()
        result = await self._execute(
            yt_minter.get_redeem_sy_out_before_maturity, yt_amount, pt_amount
        )
        return result.sy_amount

    async def get_redeem_sy_out_after_maturity(self, pt_amount: int) -> int:
        yt_minter = await self._yt_minter()
        result = await self._execute(yt_minter.get_redeem_sy_out_after_maturity, pt_amount)
        return result.sy_amount

    async def get_claimable_interest(self) -> ClaimableInterest:
        """Interest the connected account could claim now, in SY units."""

        yt_wallet = YTWallet(
            await self._resolver.resolve(AddressKind.USER_YT_WALLET), self._provider
        )
        yt_minter = await self._yt_minter()

        yt_amount = await self._execute(yt_wallet.get_balance)
        last_index = await self._execute(yt_wallet.get_last_collected_interest_index)
        acquired = await self._execute(yt_wallet.get_acquired_amount)
        return await self._execute(
            yt_minter.get_claimable_interest, yt_amount, last_index, acquired
        )

    async def get_maturity(self) -> int:
        """Maturity as a unix timestamp in seconds."""

        yt_minter = await self._yt_minter()
        return await self._execute(yt_minter.get_maturity)

    async def get_maturity_date(self) -> datetime:
        return datetime.fromtimestamp(await self.get_maturity(), tz=timezone.utc)

    async def get_balance(self, asset: FivaAsset) -> int:
        """Balance of the connected account's wallet for ``asset`` in native units."""

        kind = _USER_WALLET_BY_ASSET[self._coerce_asset(asset, "Asset")]
        wallet = JettonWallet(await self._resolver.resolve(kind), self._provider)
        return await self._execute(wallet.get_balance)

    async def get_lp_balance(self) -> int:
        wallet = JettonWallet(
            await self._resolver.resolve(AddressKind.USER_LP_WALLET), self._provider
        )
        return await self._execute(wallet.get_balance)

    async def get_expected_swap_amount_out(
        self, from_asset: FivaAsset, to_asset: FivaAsset, amount_in: int
    ) -> int:
        """Quote a swap in the caller's units.

        Underlying inputs are converted to SY before quoting and SY quotes are
        converted back to underlying.
        """
        from_asset, to_asset = self._validate_pair(from_asset, to_asset)
        if amount_in < 0:
            raise ValidationError("Amount cannot be negative", field="amount_in", value=amount_in)

        from_wallet = await self._asset_to_pool_wallet(from_asset, "From")
        to_wallet = await self._asset_to_pool_wallet(to_asset, "To")

        if from_asset is FivaAsset.UNDERLYING:
            amount_in = await self.underlying_to_sy(amount_in)

        pool = await self._pool()
        amount_out = await self._execute(
            pool.get_expected_swap_amount_out, from_wallet, to_wallet, amount_in
        )

        if to_asset is FivaAsset.UNDERLYING:
            amount_out = await self.sy_to_underlying(amount_out)
        return amount_out

    # ------------------------------------------------------------------
    # Unit conversion
    # ------------------------------------------------------------------
    async def underlying_to_sy(self, amount: int) -> int:
        index = await self.get_index()
        precision = await self.get_underlying_precision()
        return underlying_to_sy(amount, index, precision)

    async def sy_to_underlying(self, amount: int) -> int:
        index = await self.get_index()
        precision = await self.get_underlying_precision()
        return sy_to_underlying(amount, index, precision)

    # ------------------------------------------------------------------
    # Analytics
    # ------------------------------------------------------------------
    async def get_days_to_maturity(self) -> float:
        maturity = await self.get_maturity()
        return (maturity - self._clock()) / SECONDS_PER_DAY

    async def get_fixed_apy(self) -> float:
        """Annualized return of buying PT now and holding it to maturity, in percent."""

        precision = await self.get_underlying_precision()
        one_unit = 10**precision
        pt_out = await self.get_expected_swap_amount_out(
            FivaAsset.UNDERLYING, FivaAsset.PT, one_unit
        )
        # PT is quoted in SY precision; one underlying unit redeems for one PT unit at maturity
        ratio = sy_to_underlying(pt_out, 0, precision) / one_unit
        days = await self.get_days_to_maturity()
        return fixed_apy(ratio, days)

    async def get_gain(self, amount: int) -> float:
        """Percentage gain of swapping ``amount`` underlying to PT and holding to maturity."""

        _check_amount(amount)
        precision = await self.get_underlying_precision()
        pt_out = await self.get_expected_swap_amount_out(FivaAsset.UNDERLYING, FivaAsset.PT, amount)
        return percentage_gain(amount, sy_to_underlying(pt_out, 0, precision))

    # ------------------------------------------------------------------
    # Swaps
    # ------------------------------------------------------------------
    async def swap(
        self,
        from_asset: FivaAsset,
        to_asset: FivaAsset,
        amount: int,
        *,
        min_amount_out: int = 0,
        query_id: int | None = None,
        recipient: Address | str | None = None,
    ) -> None:
        from_asset, to_asset = self._validate_pair(from_asset, to_asset)
        handlers = {
            (FivaAsset.UNDERLYING, FivaAsset.PT): self.swap_underlying_for_pt,
            (FivaAsset.UNDERLYING, FivaAsset.YT): self.swap_underlying_for_yt,
            (FivaAsset.PT, FivaAsset.UNDERLYING): self.swap_pt_for_underlying,
            (FivaAsset.YT, FivaAsset.UNDERLYING): self.swap_yt_for_underlying,
        }
        await handlers[(from_asset, to_asset)](
            amount, min_amount_out=min_amount_out, query_id=query_id, recipient=recipient
        )

    async def swap_underlying_for_pt(
        self,
        amount: int,
        *,
        min_amount_out: int = 0,
        query_id: int | None = None,
        recipient: Address | str | None = None,
    ) -> None:
        await self._wrap_and_send(
            "swap_underlying_for_pt",
            SYOp.WRAP_AND_SWAP_SY_FOR_PT,
            amount,
            WrapAndSwapToPT(
                self._recipient(recipient), _check_min_out(min_amount_out, "min_amount_out")
            ),
            query_id,
        )

    async def swap_underlying_for_yt(
        self,
        amount: int,
        *,
        min_amount_out: int = 0,
        query_id: int | None = None,
        recipient: Address | str | None = None,
    ) -> None:
        await self._wrap_and_send(
            "swap_underlying_for_yt",
            SYOp.WRAP_AND_SWAP_SY_FOR_YT,
            amount,
            WrapAndSwapToYT(
                self._recipient(recipient), _check_min_out(min_amount_out, "min_amount_out")
            ),
            query_id,
        )

    async def swap_pt_for_underlying(
        self,
        amount: int,
        *,
        min_amount_out: int = 0,
        query_id: int | None = None,
        recipient: Address | str | None = None,
    ) -> None:
        _check_amount(amount)
        query_id = self._query_id(query_id)
        body = SwapPTForUnderlying(
            self._recipient(recipient), _check_min_out(min_amount_out, "min_amount_out"), query_id
        )
        wallet, pool = await self._resolver.resolve_many(
            AddressKind.USER_PT_WALLET, AddressKind.POOL
        )
        fee = await self._fees.estimate(SYOp.SWAP_PT_FOR_SY_AND_UNWRAP)
        message = self._transfer(wallet, amount, pool, fee, body, query_id)
        await self._dispatcher.send([message], action="swap_pt_for_underlying")

    async def swap_yt_for_underlying(
        self,
        amount: int,
        *,
        min_amount_out: int = 0,
        query_id: int | None = None,
        recipient: Address | str | None = None,
    ) -> None:
        _check_amount(amount)
        query_id = self._query_id(query_id)
        body = SwapYTForUnderlying(
            self._recipient(recipient), _check_min_out(min_amount_out, "min_amount_out"), query_id
        )
        wallet, pool = await self._resolver.resolve_many(
            AddressKind.USER_YT_WALLET, AddressKind.POOL
        )
        fee = await self._fees.estimate(SYOp.SWAP_YT_FOR_SY_AND_UNWRAP)
        message = self._transfer(wallet, amount, pool, fee, body, query_id)
        await self._dispatcher.send([message], action="swap_yt_for_underlying")

    # ------------------------------------------------------------------
    # Minting and redemption
    # ------------------------------------------------------------------
    async def mint_pt_and_yt(
        self, amount: int, *, query_id: int | None = None, recipient: Address | str | None = None
    ) -> None:
        await self._wrap_and_send(
            "mint_pt_and_yt",
            SYOp.WRAP_AND_MINT_PT_YT,
            amount,
            WrapAndMintPTYT(self._recipient(recipient)),
            query_id,
            custom_payload=empty_cell(),
        )

    async def redeem_pt(
        self, amount: int, *, query_id: int | None = None, recipient: Address | str | None = None
    ) -> None:
        await self._redeem("redeem_pt", AddressKind.USER_PT_WALLET, amount, query_id, recipient)

    async def redeem_yt(
        self, amount: int, *, query_id: int | None = None, recipient: Address | str | None = None
    ) -> None:
        await self._redeem("redeem_yt", AddressKind.USER_YT_WALLET, amount, query_id, recipient)

    async def redeem_batch(
        self,
        pt_amount: int,
        yt_amount: int,
        *,
        query_id: int | None = None,
        recipient: Address | str | None = None,
        ttl: float | None = None,
    ) -> None:
        """Redeem PT and YT together before maturity.

        Both messages share one wallet request and validity deadline but run
        as independent contract calls: one may succeed while the other fails.
        """
        _check_amount(pt_amount, "pt_amount")
        _check_amount(yt_amount, "yt_amount")
        query_id = self._query_id(query_id)
        body = Redeem(self._recipient(recipient), query_id)

        pt_wallet, yt_wallet, yt_minter = await self._resolver.resolve_many(
            AddressKind.USER_PT_WALLET, AddressKind.USER_YT_WALLET, AddressKind.YT_MINTER
        )
        fee = await self._fees.estimate(SYOp.REDEEM_AND_UNWRAP)
        messages = [
            self._transfer(pt_wallet, pt_amount, yt_minter, fee, body, query_id),
            self._transfer(yt_wallet, yt_amount, yt_minter, fee, body, query_id),
        ]
        await self._dispatcher.send(messages, action="redeem_batch", ttl=ttl)

    async def redeem_after_maturity(
        self, amount: int, *, query_id: int | None = None, recipient: Address | str | None = None
    ) -> None:
        _check_amount(amount)
        query_id = self._query_id(query_id)
        body = RedeemAfterMaturity(self._recipient(recipient), query_id)
        wallet, yt_minter = await self._resolver.resolve_many(
            AddressKind.USER_PT_WALLET, AddressKind.YT_MINTER
        )
        fee = await self._fees.estimate(SYOp.REDEEM_AFTER_MATURITY_AND_UNWRAP)
        message = self._transfer(wallet, amount, yt_minter, fee, body, query_id)
        await self._dispatcher.send([message], action="redeem_after_maturity")

    async def claim_interest(
        self, *, query_id: int | None = None, recipient: Address | str | None = None
    ) -> None:
        query_id = self._query_id(query_id)
        body = ClaimInterestAndUnwrap(self._recipient(recipient), query_id)

        claimable = await self.get_claimable_interest()
        logger.info(
            "Claimable interest for %s: %s (protocol fee %s)",
            self._user.to_str(),
            claimable.interest,
            claimable.protocol_fee,
        )

        yt_wallet = await self._resolver.resolve(AddressKind.USER_YT_WALLET)
        fee = await self._fees.estimate(SYOp.CLAIM_INTEREST_AND_UNWRAP)
        message = self._dispatcher.build_message(yt_wallet, fee.value, body)
        await self._dispatcher.send([message], action="claim_interest")

    # ------------------------------------------------------------------
    # Liquidity
    # ------------------------------------------------------------------
    async def add_asset_liquidity(
        self,
        amount: int,
        *,
        min_lp_out: int = 0,
        query_id: int | None = None,
        recipient: Address | str | None = None,
    ) -> None:
        await self._wrap_and_send(
            "add_asset_liquidity",
            SYOp.WRAP_AND_ADD_LIQUIDITY,
            amount,
            WrapAndAddLiquidity(
                self._recipient(recipient), _check_min_out(min_lp_out, "min_lp_out")
            ),
            query_id,
        )

    async def add_pt_liquidity(
        self,
        amount: int,
        *,
        min_lp_out: int = 0,
        query_id: int | None = None,
        recipient: Address | str | None = None,
    ) -> None:
        _check_amount(amount)
        query_id = self._query_id(query_id)
        body = AddLiquidity(
            self._recipient(recipient), _check_min_out(min_lp_out, "min_lp_out"), query_id
        )
        pt_wallet, pool = await self._resolver.resolve_many(
            AddressKind.USER_PT_WALLET, AddressKind.POOL
        )
        fee = await self._fees.estimate_pool(PoolOp.ADD_LIQUIDITY)
        message = self._transfer(pt_wallet, amount, pool, fee, body, query_id)
        await self._dispatcher.send([message], action="add_pt_liquidity")

    async def add_liquidity_batch(
        self,
        asset_amount: int,
        pt_amount: int,
        *,
        min_lp_out: int = 0,
        query_id: int | None = None,
        recipient: Address | str | None = None,
        ttl: float | None = None,
    ) -> None:
        """Provide underlying and PT liquidity in one wallet request.

        The two transfers are independent on chain; no atomicity is implied.
        """
        _check_amount(asset_amount, "asset_amount")
        _check_amount(pt_amount, "pt_amount")
        _check_min_out(min_lp_out, "min_lp_out")
        query_id = self._query_id(query_id)
        receiver = self._recipient(recipient)

        asset_wallet, pt_wallet, pool = await self._resolver.resolve_many(
            AddressKind.USER_ASSET_WALLET, AddressKind.USER_PT_WALLET, AddressKind.POOL
        )
        asset_fee = await self._fees.estimate(SYOp.WRAP_AND_ADD_LIQUIDITY)
        pt_fee = await self._fees.estimate_pool(PoolOp.ADD_LIQUIDITY)
        messages = [
            self._transfer(
                asset_wallet,
                asset_amount,
                self._resolver.sy_minter,
                asset_fee,
                WrapAndAddLiquidity(receiver, min_lp_out),
                query_id,
            ),
            self._transfer(
                pt_wallet,
                pt_amount,
                pool,
                pt_fee,
                AddLiquidity(receiver, min_lp_out, query_id),
                query_id,
            ),
        ]
        await self._dispatcher.send(messages, action="add_liquidity_batch", ttl=ttl)

    async def redeem_liquidity(
        self,
        lp_amount: int,
        *,
        query_id: int | None = None,
        recipient: Address | str | None = None,
    ) -> None:
        """Burn LP tokens for their share of the pool's SY and PT.

        The pool pays out to the burn's response address, ``recipient`` or the
        connected account.
        """

        _check_amount(lp_amount, "lp_amount")
        query_id = self._query_id(query_id)
        lp_wallet = await self._resolver.resolve(AddressKind.USER_LP_WALLET)
        fee = await self._fees.estimate(SYOp.REDEEM_AND_UNWRAP)
        body = JettonBurn(
            amount=lp_amount,
            response_address=self._recipient(recipient),
            custom_payload=RedeemLP(),
            query_id=query_id,
        )
        message = self._dispatcher.build_message(lp_wallet, fee.value, body)
        await self._dispatcher.send([message], action="redeem_liquidity")

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _sy_minter(self) -> SYMinter:
        return SYMinter(self._resolver.sy_minter, self._provider)

    async def _yt_minter(self) -> YTMinter:
        return YTMinter(await self._resolver.resolve(AddressKind.YT_MINTER), self._provider)

    async def _pool(self) -> Pool:
        return Pool(
            await self._resolver.resolve(AddressKind.POOL), self._provider, self._pool_type
        )

    def _recipient(self, recipient: Address | str | None) -> Address:
        if recipient is None:
            return self._user
        return _parse_address(recipient, "recipient")

    @staticmethod
    def _query_id(query_id: int | None) -> int:
        if query_id is None:
            return generate_query_id()
        return validate_query_id(query_id)

    @staticmethod
    def _coerce_asset(asset: FivaAsset | int, label: str) -> FivaAsset:
        try:
            return FivaAsset(asset)
        except ValueError as exc:
            raise UnresolvedAssetError(f"{label} asset is not found", asset=asset) from exc

    def _validate_pair(
        self, from_asset: FivaAsset | int, to_asset: FivaAsset | int
    ) -> tuple[FivaAsset, FivaAsset]:
        source = self._coerce_asset(from_asset, "From")
        target = self._coerce_asset(to_asset, "To")
        if source is target:
            raise InvalidAssetPairError(
                "From and to assets are the same", from_asset=source, to_asset=target
            )
        if source in _TOKENIZED and target in _TOKENIZED:
            raise InvalidAssetPairError(
                "Swaps between PT and YT assets are not supported",
                from_asset=source,
                to_asset=target,
            )
        return source, target

    async def _asset_to_pool_wallet(self, asset: FivaAsset, label: str) -> Address:
        kind = _POOL_WALLET_BY_ASSET.get(asset)
        if kind is None:
            raise UnresolvedAssetError(f"{label} asset is not found", asset=asset)
        return await self._resolver.resolve(kind)

    def _transfer(
        self,
        wallet: Address,
        amount: int,
        destination: Address,
        fee: FeeEstimate,
        forward_payload: ForwardPayload,
        query_id: int,
        custom_payload: Cell | None = None,
    ) -> TransactionMessage:
        body = JettonTransfer(
            amount=amount,
            destination=destination,
            response_address=self._user,
            forward_ton_amount=fee.fwd_value,
            forward_payload=forward_payload,
            custom_payload=custom_payload,
            query_id=query_id,
        )
        return self._dispatcher.build_message(wallet, fee.value, body)

    async def _wrap_and_send(
        self,
        action: str,
        op: SYOp,
        amount: int,
        forward_payload: ForwardPayload,
        query_id: int | None,
        *,
        custom_payload: Cell | None = None,
    ) -> None:
        """Send underlying to the SY minter, which wraps it and runs ``op``."""

        _check_amount(amount)
        query_id = self._query_id(query_id)
        wallet = await self._resolver.resolve(AddressKind.USER_ASSET_WALLET)
        fee = await self._fees.estimate(op)
        message = self._transfer(
            wallet,
            amount,
            self._resolver.sy_minter,
            fee,
            forward_payload,
            query_id,
            custom_payload=custom_payload,
        )
        await self._dispatcher.send([message], action=action)

    async def _redeem(
        self,
        action: str,
        wallet_kind: AddressKind,
        amount: int,
        query_id: int | None,
        recipient: Address | str | None,
    ) -> None:
        _check_amount(amount)
        query_id = self._query_id(query_id)
        body = Redeem(self._recipient(recipient), query_id)
        wallet, yt_minter = await self._resolver.resolve_many(wallet_kind, AddressKind.YT_MINTER)
        fee = await self._fees.estimate(SYOp.REDEEM_AND_UNWRAP)
        message = self._transfer(wallet, amount, yt_minter, fee, body, query_id)
        await self._dispatcher.send([message], action=action)
