# stockmarket/crud.py

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from logger import logger
from stockmarket import logic
from stockmarket.events import EventService
from stockmarket.exceptions import NotFoundError, ValidationFailure
from stockmarket.models import Stock, Transaction, TransactionType
from stockmarket.schemas import (
    StockCreate, StockUpdate, TransactionCreate, TransactionUpdate,
    TransactionResponse, StockSummaryResponse, PriceChangeEvent,
)

TOP_N = 10


# ---------------------------------------------------------------- stocks

def create_stock(db: Session, request: StockCreate) -> Stock:
    """
    Creates a new stock, deriving its change values from the previous close.

    Args:
        db (Session): SQLAlchemy session.
        request (StockCreate): Stock data.

    Returns:
        Stock: The created stock.

    Raises:
        ValidationFailure: A stock with the same symbol already exists.
    """
    logger.info(f"Creating new stock with symbol: {request.symbol}")
    if db.query(Stock).filter(Stock.symbol == request.symbol).first() is not None:
        logger.warning(f"Stock with symbol {request.symbol} already exists")
        raise ValidationFailure(f"Stock with symbol {request.symbol} already exists")

    change, change_percent = logic.compute_change(request.current_price, request.previous_close)
    stock = Stock(
        symbol=request.symbol,
        company_name=request.company_name,
        current_price=request.current_price,
        previous_close=request.previous_close,
        change=change,
        change_percent=change_percent,
        volume=request.volume,
        sector=request.sector,
        industry=request.industry,
        last_updated=datetime.now()
    )
    db.add(stock)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationFailure(f"Stock with symbol {request.symbol} already exists")
    db.refresh(stock)
    logger.info(f"Stock created successfully with ID: {stock.id}")
    return stock


def get_stock_by_id(db: Session, stock_id: int) -> Stock:
    logger.debug(f"Getting stock by ID: {stock_id}")
    stock = db.get(Stock, stock_id)
    if stock is None:
        logger.warning(f"Stock not found with ID: {stock_id}")
        raise NotFoundError(f"Stock not found with id {stock_id}")
    return stock


def get_stock_by_symbol(db: Session, symbol: str) -> Stock:
    logger.debug(f"Getting stock by symbol: {symbol}")
    stock = db.query(Stock).filter(Stock.symbol == symbol).first()
    if stock is None:
        logger.warning(f"Stock not found with symbol: {symbol}")
        raise NotFoundError(f"Stock not found with symbol {symbol}")
    return stock


def get_all_stocks(db: Session) -> List[Stock]:
    return db.query(Stock).order_by(Stock.id).all()


def get_stocks_by_sector(db: Session, sector: str) -> List[Stock]:
    return db.query(Stock).filter(Stock.sector == sector).order_by(Stock.id).all()


def get_stocks_by_industry(db: Session, industry: str) -> List[Stock]:
    return db.query(Stock).filter(Stock.industry == industry).order_by(Stock.id).all()


def get_most_active_stocks(db: Session, limit: int = TOP_N) -> List[Stock]:
    """Returns the stocks with the highest traded volume."""
    return db.query(Stock).order_by(Stock.volume.desc().nulls_last()).limit(limit).all()


def get_top_gainers(db: Session, limit: int = TOP_N) -> List[Stock]:
    """Returns the stocks with the highest percentage change."""
    return db.query(Stock).order_by(Stock.change_percent.desc().nulls_last()).limit(limit).all()


def update_stock(
    db: Session,
    symbol: str,
    request: StockUpdate,
    events: Optional[EventService] = None
) -> Stock:
    """
    Applies a partial update to a stock.

    When the price or previous close changes and both are known, the change
    values are recomputed and a price-change event is sent.

    Args:
        db (Session): SQLAlchemy session.
        symbol (str): Symbol of the stock to update.
        request (StockUpdate): Fields to change; unset fields are left alone.
        events (EventService): Receives the price-change event, if given.

    Returns:
        Stock: The updated stock.
    """
    logger.info(f"Updating stock with symbol: {symbol}")
    stock = get_stock_by_symbol(db, symbol)

    price_changed = False
    if request.company_name is not None:
        stock.company_name = request.company_name
    if request.current_price is not None:
        stock.current_price = request.current_price
        price_changed = True
    if request.previous_close is not None:
        stock.previous_close = request.previous_close
        price_changed = True
    if request.volume is not None:
        stock.volume = request.volume
    if request.sector is not None:
        stock.sector = request.sector
    if request.industry is not None:
        stock.industry = request.industry

    now = datetime.now()
    event = None
    if price_changed and stock.previous_close is not None:
        stock.change, stock.change_percent = logic.compute_change(
            Decimal(stock.current_price), Decimal(stock.previous_close)
        )
        event = PriceChangeEvent(
            symbol=stock.symbol,
            price=stock.current_price,
            change=stock.change,
            change_percent=stock.change_percent,
            timestamp=now
        )
    stock.last_updated = now

    db.commit()
    db.refresh(stock)
    if event is not None and events is not None:
        events.send_price_update(event)
    logger.info(f"Stock updated successfully: {symbol}")
    return stock


def save_stock(db: Session, stock: Stock) -> Stock:
    """
    Upserts a stock by identity and returns the persisted row.

    Args:
        db (Session): SQLAlchemy session.
        stock (Stock): A stock, possibly loaded by another session.

    Returns:
        Stock: The stock as stored.
    """
    merged = db.merge(stock)
    db.commit()
    db.refresh(merged)
    return merged


def delete_stock(db: Session, symbol: str) -> None:
    logger.info(f"Deleting stock with symbol: {symbol}")
    stock = get_stock_by_symbol(db, symbol)
    db.delete(stock)
    db.commit()
    logger.info(f"Stock deleted successfully: {symbol}")


# ---------------------------------------------------------- transactions

def create_transaction(
    db: Session,
    request: TransactionCreate,
    events: Optional[EventService] = None
) -> Transaction:
    """
    Records a transaction; the total value is computed from quantity and price.

    Args:
        db (Session): SQLAlchemy session.
        request (TransactionCreate): Transaction data.
        events (EventService): Receives the new transaction, if given.

    Returns:
        Transaction: The created transaction.
    """
    logger.info(f"Creating transaction for stock {request.stock_symbol}")
    transaction = Transaction(
        type=request.type,
        stock_symbol=request.stock_symbol,
        quantity=request.quantity,
        price_per_share=request.price_per_share,
        total_value=logic.to_money(request.price_per_share * request.quantity),
        timestamp=datetime.now(),
        user_id=request.user_id,
        portfolio_id=request.portfolio_id,
        notes=request.notes
    )
    db.add(transaction)
    db.commit()
    db.refresh(transaction)
    logger.info(f"Transaction created with ID: {transaction.id}")

    if events is not None:
        events.send_transaction(TransactionResponse.model_validate(transaction))
    return transaction


def get_transaction_by_id(db: Session, transaction_id: int) -> Transaction:
    logger.info(f"Retrieving transaction with ID: {transaction_id}")
    transaction = db.get(Transaction, transaction_id)
    if transaction is None:
        logger.error(f"Transaction not found with ID: {transaction_id}")
        raise NotFoundError(f"Transaction not found with ID: {transaction_id}")
    return transaction


def get_all_transactions(db: Session) -> List[Transaction]:
    return db.query(Transaction).order_by(Transaction.id).all()


def get_transactions_by_stock_symbol(db: Session, stock_symbol: str) -> List[Transaction]:
    return (
        db.query(Transaction)
        .filter(Transaction.stock_symbol == stock_symbol)
        .order_by(Transaction.id)
        .all()
    )


def get_transactions_by_type(db: Session, type: TransactionType) -> List[Transaction]:
    return db.query(Transaction).filter(Transaction.type == type).order_by(Transaction.id).all()


def update_transaction(db: Session, transaction_id: int, request: TransactionUpdate) -> Transaction:
    """
    Applies a partial update to a transaction, recomputing the total value
    whenever the quantity or price per share changes.
    """
    logger.info(f"Updating transaction with ID: {transaction_id}")
    transaction = get_transaction_by_id(db, transaction_id)

    if request.type is not None:
        transaction.type = request.type
    if request.stock_symbol is not None:
        transaction.stock_symbol = request.stock_symbol
    if request.quantity is not None:
        transaction.quantity = request.quantity
    if request.price_per_share is not None:
        transaction.price_per_share = request.price_per_share
    if request.quantity is not None or request.price_per_share is not None:
        transaction.total_value = logic.to_money(Decimal(transaction.price_per_share) * transaction.quantity)
    if request.notes is not None:
        transaction.notes = request.notes

    db.commit()
    db.refresh(transaction)
    logger.info("Transaction updated successfully")
    return transaction


def delete_transaction(db: Session, transaction_id: int) -> None:
    logger.info(f"Deleting transaction with ID: {transaction_id}")
    transaction = get_transaction_by_id(db, transaction_id)
    db.delete(transaction)
    db.commit()
    logger.info("Transaction deleted successfully")


# ------------------------------------------------------------- summaries

def _summary_query(db: Session):
    return db.query(
        Transaction.stock_symbol,
        func.count(Transaction.id),
        func.avg(Transaction.price_per_share),
        func.sum(Transaction.quantity),
    ).group_by(Transaction.stock_symbol)


def _to_summary(row) -> StockSummaryResponse:
    symbol, total_transactions, average_price, total_volume = row
    return StockSummaryResponse(
        symbol=symbol,
        total_transactions=total_transactions,
        average_price=float(average_price) if average_price is not None else None,
        total_volume=int(total_volume) if total_volume is not None else None
    )


def get_stock_summaries(db: Session) -> List[StockSummaryResponse]:
    """
    Aggregates transactions per symbol, busiest symbols first.

    Returns:
        list[StockSummaryResponse]: One summary per traded symbol.
    """
    rows = _summary_query(db).order_by(func.count(Transaction.id).desc()).all()
    return [_to_summary(row) for row in rows]


def get_stock_summary(db: Session, symbol: str) -> StockSummaryResponse:
    row = _summary_query(db).filter(Transaction.stock_symbol == symbol).first()
    if row is None:
        raise NotFoundError(f"No summary found for stock symbol: {symbol}")
    return _to_summary(row)
