# stockmarket/exceptions.py


class StockMarketError(Exception):
    """Base class for errors surfaced to API callers."""


class NotFoundError(StockMarketError):
    """The requested stock, transaction or summary does not exist."""


class ValidationFailure(StockMarketError):
    """The request is malformed or conflicts with existing data (e.g. a duplicate symbol)."""
