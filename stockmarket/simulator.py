# stockmarket/simulator.py

import random
import threading
from datetime import datetime
from decimal import Decimal
from typing import Optional
from logger import logger
from stockmarket import logic
from stockmarket.events import EventService
from stockmarket.models import Stock
from stockmarket.schemas import PriceChangeEvent


class PriceSimulator:
    """
    Moves every stock's price by a random percentage and announces the change.

    Stocks are processed one at a time. A failure to persist one stock is
    logged and the remaining stocks are still processed; publishing is
    best-effort and never undoes a saved price. Runs are serialized by a
    lock, so the scheduler and a manual trigger never overlap.

    Args:
        store: Provides ``list_all()`` and ``save(stock)``.
        events (EventService): Sends the price-change events.
        enabled (bool): When False a run does nothing.
        min_change_percent (float): Lower bound of the random change.
        max_change_percent (float): Upper bound of the random change.
        rng (random.Random): Source of the random changes; seed it for
            reproducible prices.
    """

    def __init__(
        self,
        store,
        events: EventService,
        enabled: bool = True,
        min_change_percent: float = -5.0,
        max_change_percent: float = 5.0,
        rng: Optional[random.Random] = None,
    ):
        if min_change_percent > max_change_percent:
            raise ValueError("min_change_percent must not exceed max_change_percent")
        self.store = store
        self.events = events
        self.enabled = enabled
        self.min_change_percent = min_change_percent
        self.max_change_percent = max_change_percent
        self.rng = rng or random.Random()
        self._lock = threading.Lock()

    def simulate_price_changes(self) -> None:
        """Runs one tick over all stocks."""
        if not self.enabled:
            logger.debug("Stock price simulation is disabled")
            return

        with self._lock:
            stocks = self.store.list_all()
            if not stocks:
                logger.info("No stocks found in database. Skipping price simulation.")
                return

            logger.info(f"Simulating price changes for {len(stocks)} stocks")
            for stock in stocks:
                try:
                    self._simulate_stock(stock)
                except Exception as e:
                    logger.error(f"Failed to update price for {stock.symbol}: {e}", exc_info=True)

    def _simulate_stock(self, stock: Stock) -> None:
        change_percent = logic.draw_change_percent(
            self.rng, self.min_change_percent, self.max_change_percent
        )
        move = logic.apply_change_percent(Decimal(stock.current_price), change_percent)

        stock.current_price = move.price
        stock.last_updated = datetime.now()
        self.store.save(stock)

        self.events.send_price_update(PriceChangeEvent(
            symbol=stock.symbol,
            price=move.price,
            change=move.change,
            change_percent=move.change_percent,
            timestamp=datetime.now()
        ))

        sign = "+" if move.change >= 0 else ""
        logger.info(
            f"Updated price for {stock.symbol}: {move.price} ({sign}{move.change} / {move.change_percent}%)"
        )
