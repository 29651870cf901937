"""Tests for the decimal price arithmetic."""

import random
from decimal import Decimal

from stockmarket import logic


class FixedRandom(random.Random):
    def __init__(self, value: float) -> None:
        super().__init__()
        self.value = value

    def uniform(self, a, b):
        return self.value


def test_one_percent_rise_from_150():
    move = logic.apply_change_percent(Decimal("150.00"), Decimal("1.00"))
    assert move.price == Decimal("151.50")
    assert move.change == Decimal("1.50")
    assert move.change_percent == Decimal("1.00")


def test_change_rounds_half_up():
    # 1.00 * 0.50% = 0.005 exactly; half-even would give 0.00
    move = logic.apply_change_percent(Decimal("1.00"), Decimal("0.50"))
    assert move.change == Decimal("0.01")
    assert move.price == Decimal("1.01")


def test_negative_change_rounds_half_up_away_from_zero():
    move = logic.apply_change_percent(Decimal("1.00"), Decimal("-0.50"))
    assert move.change == Decimal("-0.01")
    assert move.price == Decimal("0.99")


def test_price_clamped_to_minimum_when_projection_is_negative():
    move = logic.apply_change_percent(Decimal("10.00"), Decimal("-150.00"))
    assert move.price == Decimal("0.01")
    assert move.change == Decimal("-9.99")
    # -9.99 / 10.00 = -0.9990 -> -99.90%
    assert move.change_percent == Decimal("-99.90")


def test_price_clamped_when_rounding_reaches_zero():
    move = logic.apply_change_percent(Decimal("0.02"), Decimal("-90.00"))
    assert move.price == Decimal("0.01")
    assert move.change == Decimal("-0.01")
    assert move.change_percent == Decimal("-50.00")


def test_minimum_price_is_not_clamped():
    move = logic.apply_change_percent(Decimal("0.01"), Decimal("0.00"))
    assert move.price == Decimal("0.01")
    assert move.change == Decimal("0.00")


def test_draw_is_quantized_to_two_places():
    assert logic.draw_change_percent(FixedRandom(1.0), -5.0, 5.0) == Decimal("1.00")
    assert logic.draw_change_percent(FixedRandom(-2.5), -5.0, 5.0) == Decimal("-2.50")


def test_draw_stays_within_bounds():
    rng = random.Random(3)
    for _ in range(500):
        value = logic.draw_change_percent(rng, -5.0, 5.0)
        assert Decimal("-5.00") <= value <= Decimal("5.00")


def test_draw_is_reproducible_for_a_seed():
    def draws(seed):
        rng = random.Random(seed)
        return [logic.draw_change_percent(rng, -5.0, 5.0) for _ in range(3)]

    first = draws(11)
    assert first == draws(11)
    assert len(set(first)) > 1


def test_compute_change_against_previous_close():
    change, change_percent = logic.compute_change(Decimal("194.50"), Decimal("192.75"))
    assert change == Decimal("1.75")
    # 1.75 / 192.75 = 0.00907... -> 0.0091 -> 0.91%
    assert change_percent == Decimal("0.9100")


def test_compute_change_without_previous_close():
    assert logic.compute_change(Decimal("10.00"), None) == (None, None)


def test_to_money():
    assert logic.to_money(Decimal("2.345")) == Decimal("2.35")
    assert logic.to_money(3) == Decimal("3.00")
