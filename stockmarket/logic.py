# stockmarket/logic.py

import random
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Tuple

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")
HUNDRED = Decimal("100")
MIN_PRICE = Decimal("0.01")


@dataclass(frozen=True)
class PriceMove:
    price: Decimal
    change: Decimal
    change_percent: Decimal


def to_money(value) -> Decimal:
    """Rounds a value to 2 decimal places, half-up."""
    return Decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def percent_of(change: Decimal, base: Decimal) -> Decimal:
    """
    Expresses change as a percentage of base.

    The ratio is rounded to 4 decimal places before scaling, so the
    result carries 4 decimals (e.g. 0.0091 -> 0.9100).
    """
    return (change / base).quantize(FOUR_PLACES, rounding=ROUND_HALF_UP) * HUNDRED


def compute_change(current_price: Decimal, previous_close: Optional[Decimal]) -> Tuple[Optional[Decimal], Optional[Decimal]]:
    """
    Derives the absolute and percentage change of a stock against its
    previous close. Returns (None, None) when there is nothing to compare to.
    """
    if current_price is None or previous_close is None or previous_close == 0:
        return None, None
    change = current_price - previous_close
    return change, percent_of(change, previous_close)


def draw_change_percent(rng: random.Random, min_percent: float, max_percent: float) -> Decimal:
    """
    Draws a percentage uniformly from [min_percent, max_percent],
    quantized to 2 decimal places.
    """
    return Decimal(rng.uniform(min_percent, max_percent)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def apply_change_percent(price: Decimal, change_percent: Decimal) -> PriceMove:
    """
    Moves a price by change_percent and clamps the result to MIN_PRICE.

    Args:
        price (Decimal): Current price, > 0.
        change_percent (Decimal): Percentage to apply, e.g. Decimal("1.00").

    Returns:
        PriceMove: The new price with the change actually applied.
    """
    change = (price * change_percent / HUNDRED).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    new_price = (price + change).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)

    if new_price < MIN_PRICE:
        new_price = MIN_PRICE
        change = new_price - price
        change_percent = percent_of(change, price).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)

    return PriceMove(price=new_price, change=change, change_percent=change_percent)
