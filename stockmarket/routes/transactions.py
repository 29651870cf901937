# stockmarket/routes/transactions.py

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
from typing import List
from stockmarket import schemas, crud
from stockmarket.database import get_db
from stockmarket.dependencies import get_event_service
from stockmarket.events import EventService
from stockmarket.models import TransactionType
from logger import logger

router = APIRouter(
    prefix="/api/transactions",
    tags=["transactions"]
)


@router.post("", response_model=schemas.TransactionResponse, status_code=status.HTTP_201_CREATED)
def create_transaction(
    request: schemas.TransactionCreate,
    db: Session = Depends(get_db),
    events: EventService = Depends(get_event_service)
):
    """
    Records a new stock transaction. The total value is computed server-side.
    """
    logger.info(f"REST request to create transaction: {request.type.value} {request.stock_symbol}")
    return crud.create_transaction(db, request, events)


@router.get("", response_model=List[schemas.TransactionResponse])
def get_all_transactions(db: Session = Depends(get_db)):
    return crud.get_all_transactions(db)


@router.get("/stock", response_model=List[schemas.TransactionResponse])
def get_transactions_by_stock_symbol(
    stock_symbol: str = Query(..., min_length=1, description="Stock symbol (e.g., AAPL, MSFT)"),
    db: Session = Depends(get_db)
):
    logger.info(f"Retrieving transactions for stock: {stock_symbol}")
    return crud.get_transactions_by_stock_symbol(db, stock_symbol)


@router.get("/type", response_model=List[schemas.TransactionResponse])
def get_transactions_by_type(
    type: TransactionType = Query(..., description="Transaction type (BUY or SELL)"),
    db: Session = Depends(get_db)
):
    logger.info(f"Retrieving transactions of type: {type.value}")
    return crud.get_transactions_by_type(db, type)


@router.get("/{transaction_id}", response_model=schemas.TransactionResponse)
def get_transaction_by_id(transaction_id: int, db: Session = Depends(get_db)):
    return crud.get_transaction_by_id(db, transaction_id)


@router.put("/{transaction_id}", response_model=schemas.TransactionResponse)
def update_transaction(
    transaction_id: int,
    request: schemas.TransactionUpdate,
    db: Session = Depends(get_db)
):
    """
    Updates the given fields of a transaction; the total value follows
    quantity and price per share.
    """
    return crud.update_transaction(db, transaction_id, request)


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(transaction_id: int, db: Session = Depends(get_db)):
    crud.delete_transaction(db, transaction_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
