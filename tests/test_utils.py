"""Tests for utility functions."""

import time

import pytest

from fiva_sdk.constants import MAX_QUERY_ID
from fiva_sdk.exceptions import ValidationError
from fiva_sdk.utils import (
    fixed_apy,
    from_user_representation,
    generate_query_id,
    percentage_gain,
    sy_to_underlying,
    to_user_representation,
    underlying_to_sy,
    validate_query_id,
)


class TestUnderlyingToSy:
    """Conversions between underlying and SY units."""

    def test_non_rebasing_six_decimals(self):
        assert underlying_to_sy(1_000_000, 0, 6) == 1_000_000_000

    def test_non_rebasing_nine_decimals_is_identity(self):
        assert underlying_to_sy(123_456_789, 0, 9) == 123_456_789

    def test_rebasing_divides_by_index(self):
        # index 1.25 -> 0.8 SY per underlying unit
        assert underlying_to_sy(1_000_000, 1_250_000, 6) == 800_000_000

    def test_rebasing_floors(self):
        assert underlying_to_sy(1, 3_000_000, 6) == 333

    def test_sy_to_underlying_rebasing(self):
        assert sy_to_underlying(800_000_000, 1_250_000, 6) == 1_000_000

    def test_sy_to_underlying_non_rebasing_floors(self):
        assert sy_to_underlying(1_999, 0, 6) == 1

    @pytest.mark.parametrize("amount", [0, 1, 7, 999_999, 10**15])
    @pytest.mark.parametrize("precision", [0, 6, 9])
    def test_non_rebasing_round_trip_is_exact(self, amount, precision):
        sy = underlying_to_sy(amount, 0, precision)
        assert sy_to_underlying(sy, 0, precision) == amount

    def test_neutral_index(self):
        assert underlying_to_sy(1_000_000, 1_000_000, 6) == 1_000_000_000

    def test_neutral_index_round_trip_is_exact(self):
        sy = underlying_to_sy(1_000_000, 1_000_000, 6)
        assert sy_to_underlying(sy, 1_000_000, 6) == 1_000_000

    @pytest.mark.parametrize("index", [1_000_001, 1_250_000, 3_333_333])
    def test_rebasing_round_trip_loses_at_most_one_unit_at_six_decimals(self, index):
        for amount in (1, 17, 1_000_000, 123_456_789):
            back = sy_to_underlying(underlying_to_sy(amount, index, 6), index, 6)
            assert amount - 1 <= back <= amount

    def test_rebasing_round_trip_loss_at_nine_decimals(self):
        # one SY unit is worth three underlying units here
        index = 3_000_000
        max_loss = -(-index * 10**9 // 10**15)
        assert max_loss == 3

        losses = {}
        for amount in (1, 2, 5, 1_000_000_007):
            back = sy_to_underlying(underlying_to_sy(amount, index, 9), index, 9)
            losses[amount] = amount - back
        assert losses[2] == 2
        assert all(0 <= loss <= max_loss for loss in losses.values())

    @pytest.mark.parametrize(
        "args",
        [(-1, 0, 6), (1, -1, 6), (1, 0, -1)],
    )
    def test_negative_inputs_rejected(self, args):
        with pytest.raises(ValidationError):
            underlying_to_sy(*args)
        with pytest.raises(ValidationError):
            sy_to_underlying(*args)


class TestUserRepresentation:
    """Display formatting of integer amounts."""

    def test_rounds_half_up_to_three_places(self):
        assert to_user_representation(1_234_500, 6) == "1.235"

    def test_rounds_down_below_half(self):
        assert to_user_representation(1_234_499, 6) == "1.234"

    def test_zero(self):
        assert to_user_representation(0, 9) == "0.000"

    def test_large_amount_keeps_integer_digits(self):
        assert to_user_representation(10**40, 9) == f"{10**31}.000"

    def test_parse_truncates_extra_digits(self):
        assert from_user_representation("1.2345678", 6) == 1_234_567

    def test_parse_integer(self):
        assert from_user_representation("42", 9) == 42_000_000_000

    @pytest.mark.parametrize("text", ["abc", "-1", "NaN", "Infinity", ""])
    def test_parse_rejects_invalid(self, text):
        with pytest.raises(ValidationError):
            from_user_representation(text, 6)


class TestQueryId:
    def test_generated_from_wall_clock_milliseconds(self):
        before = int(time.time() * 1000)
        query_id = generate_query_id()
        after = int(time.time() * 1000)
        assert before <= query_id <= after

    def test_validate_accepts_bounds(self):
        assert validate_query_id(0) == 0
        assert validate_query_id(MAX_QUERY_ID) == MAX_QUERY_ID

    @pytest.mark.parametrize("query_id", [-1, MAX_QUERY_ID + 1])
    def test_validate_rejects_out_of_range(self, query_id):
        with pytest.raises(ValidationError):
            validate_query_id(query_id)


class TestAnalytics:
    def test_fixed_apy_scenario(self):
        assert fixed_apy(1.02, 20) == pytest.approx(36.5)

    def test_fixed_apy_requires_positive_days(self):
        with pytest.raises(ValidationError):
            fixed_apy(1.02, 0)

    def test_percentage_gain(self):
        assert percentage_gain(1_000_000, 1_050_000) == pytest.approx(5.0)

    def test_percentage_gain_rejects_empty_input(self):
        with pytest.raises(ValidationError):
            percentage_gain(0, 10)
