# stockmarket/store.py

from typing import Callable, List
from sqlalchemy.orm import Session
from stockmarket import crud
from stockmarket.models import Stock


class SqlAlchemyStockStore:
    """
    Stock store for code running outside a request, such as the price
    simulator. Every call uses its own session, so each save commits on
    its own.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def list_all(self) -> List[Stock]:
        with self._session_factory() as db:
            return crud.get_all_stocks(db)

    def save(self, stock: Stock) -> Stock:
        with self._session_factory() as db:
            return crud.save_stock(db, stock)
