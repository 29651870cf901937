# stockmarket/dependencies.py

import random
from functools import lru_cache
from stockmarket.config import settings
from stockmarket.database import SessionLocal
from stockmarket.events import EventService, build_event_service
from stockmarket.simulator import PriceSimulator
from stockmarket.store import SqlAlchemyStockStore


@lru_cache(maxsize=None)
def get_event_service() -> EventService:
    return build_event_service(settings)


@lru_cache(maxsize=None)
def get_simulator() -> PriceSimulator:
    return PriceSimulator(
        SqlAlchemyStockStore(SessionLocal),
        get_event_service(),
        enabled=settings.SIMULATOR_ENABLED,
        min_change_percent=settings.SIMULATOR_MIN_CHANGE_PERCENT,
        max_change_percent=settings.SIMULATOR_MAX_CHANGE_PERCENT,
        rng=random.Random(settings.SIMULATOR_SEED)
    )
