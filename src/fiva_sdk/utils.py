"""Utility functions for the FIVA SDK."""

import time
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

from .constants import (
    DAYS_PER_YEAR,
    INDEX_PRECISION,
    MAX_QUERY_ID,
    SY_PRECISION,
    USER_REPRESENTATION_DECIMALS,
)
from .exceptions import ValidationError


def _check_amount(amount: int, field: str = "amount") -> None:
    if amount < 0:
        raise ValidationError("Amount cannot be negative", field=field, value=amount)


def _precision_scale(underlying_precision: int) -> int:
    if underlying_precision < 0:
        raise ValidationError(
            "Underlying precision cannot be negative",
            field="underlying_precision",
            value=underlying_precision,
        )
    return 10**underlying_precision


def underlying_to_sy(amount: int, index: int, underlying_precision: int) -> int:
    """Convert an underlying-asset amount to SY units (9 decimals).

    ``index`` is the SY-per-underlying rate scaled by 10**6, or 0 for a
    non-rebasing underlying. Every division floors.
    """
    _check_amount(amount)
    _check_amount(index, field="index")
    scale = _precision_scale(underlying_precision)

    if index > 0:
        return amount * INDEX_PRECISION * SY_PRECISION // index // scale
    return amount * SY_PRECISION // scale


def sy_to_underlying(amount: int, index: int, underlying_precision: int) -> int:
    """Convert an SY amount back to underlying-asset units (inverse of ``underlying_to_sy``).

    A round trip through SY loses at most ``ceil(index * 10**p / 10**15)``
    underlying units. That is one unit while ``index * 10**p <= 10**15``;
    with 9 decimals and an index above 10**6 one SY unit is worth more than
    one underlying unit and the loss grows with it.
    """
    _check_amount(amount)
    _check_amount(index, field="index")
    scale = _precision_scale(underlying_precision)

    if index > 0:
        return amount * index * scale // SY_PRECISION // INDEX_PRECISION
    return amount * scale // SY_PRECISION


def to_user_representation(amount: int, decimals: int) -> str:
    """Render an integer amount as a decimal string rounded to three places.

    Display only: the rounding loses precision, so the result must not be
    parsed back into an on-chain amount.
    """
    quantizer = Decimal(1).scaleb(-USER_REPRESENTATION_DECIMALS)
    with localcontext() as ctx:
        ctx.prec = max(28, len(str(abs(amount))) + USER_REPRESENTATION_DECIMALS + 2)
        value = Decimal(amount).scaleb(-decimals)
        return str(value.quantize(quantizer, rounding=ROUND_HALF_UP))


def from_user_representation(text: str, decimals: int) -> int:
    """Parse a user-typed decimal string into integer units, truncating extra digits."""
    try:
        value = Decimal(str(text).strip())
    except InvalidOperation as exc:
        raise ValidationError(
            "Amount must be a decimal number", field="amount", value=text
        ) from exc

    if not value.is_finite():
        raise ValidationError("Amount must be finite", field="amount", value=text)
    if value < 0:
        raise ValidationError("Amount cannot be negative", field="amount", value=text)

    return int(value.scaleb(decimals).to_integral_value(rounding=ROUND_DOWN))


def generate_query_id() -> int:
    """Return a wall-clock derived 64-bit query id (milliseconds since epoch)."""
    return int(time.time() * 1000) & MAX_QUERY_ID


def validate_query_id(query_id: int) -> int:
    if not 0 <= query_id <= MAX_QUERY_ID:
        raise ValidationError("Query id must fit in 64 bits", field="query_id", value=query_id)
    return query_id


def fixed_apy(ratio: float, days_to_maturity: float) -> float:
    """Annualized percentage return implied by a PT-per-underlying ratio.

    A ratio of 1.02 with 20 days left yields ``0.02 * 365 / 20 * 100``.
    """
    if days_to_maturity <= 0:
        raise ValidationError(
            "Days to maturity must be positive",
            field="days_to_maturity",
            value=days_to_maturity,
        )
    return (ratio - 1) * DAYS_PER_YEAR / days_to_maturity * 100


def percentage_gain(amount_in: int, amount_out: int) -> float:
    """Simple percentage gain of receiving ``amount_out`` for ``amount_in``."""
    if amount_in <= 0:
        raise ValidationError("Amount must be positive", field="amount_in", value=amount_in)
    return (amount_out - amount_in) / amount_in * 100
