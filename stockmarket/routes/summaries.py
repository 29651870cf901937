# stockmarket/routes/summaries.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from stockmarket import schemas, crud
from stockmarket.database import get_db

router = APIRouter(
    prefix="/api/stock-summaries",
    tags=["stock-summaries"]
)


@router.get("", response_model=List[schemas.StockSummaryResponse])
def get_all_stock_summaries(db: Session = Depends(get_db)):
    """
    Transaction counts, average price and volume per symbol.
    """
    return crud.get_stock_summaries(db)


@router.get("/{symbol}", response_model=schemas.StockSummaryResponse)
def get_stock_summary(symbol: str, db: Session = Depends(get_db)):
    return crud.get_stock_summary(db, symbol)
