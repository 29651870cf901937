# stockmarket/routes/stocks.py

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List
from stockmarket import schemas, crud
from stockmarket.database import get_db
from stockmarket.dependencies import get_event_service
from stockmarket.events import EventService
from logger import logger

router = APIRouter(
    prefix="/api/stocks",
    tags=["stocks"]
)


@router.post("", response_model=schemas.StockResponse, status_code=status.HTTP_201_CREATED)
def create_stock(request: schemas.StockCreate, db: Session = Depends(get_db)):
    """
    Creates a new stock. Symbols must be unique.
    """
    logger.info(f"REST request to create stock: {request.symbol}")
    return crud.create_stock(db, request)


@router.get("", response_model=List[schemas.StockResponse])
def get_all_stocks(db: Session = Depends(get_db)):
    logger.info("REST request to get all stocks")
    return crud.get_all_stocks(db)


@router.get("/most-active", response_model=List[schemas.StockResponse])
def get_most_active_stocks(db: Session = Depends(get_db)):
    """
    Returns the ten stocks with the highest volume.
    """
    logger.info("REST request to get most active stocks")
    return crud.get_most_active_stocks(db)


@router.get("/top-gainers", response_model=List[schemas.StockResponse])
def get_top_gainers(db: Session = Depends(get_db)):
    """
    Returns the ten stocks with the highest percentage change.
    """
    logger.info("REST request to get top gaining stocks")
    return crud.get_top_gainers(db)


@router.get("/symbol/{symbol}", response_model=schemas.StockResponse)
def get_stock_by_symbol(symbol: str, db: Session = Depends(get_db)):
    logger.info(f"REST request to get stock by symbol: {symbol}")
    return crud.get_stock_by_symbol(db, symbol)


@router.get("/sector/{sector}", response_model=List[schemas.StockResponse])
def get_stocks_by_sector(sector: str, db: Session = Depends(get_db)):
    logger.info(f"REST request to get stocks by sector: {sector}")
    return crud.get_stocks_by_sector(db, sector)


@router.get("/industry/{industry}", response_model=List[schemas.StockResponse])
def get_stocks_by_industry(industry: str, db: Session = Depends(get_db)):
    logger.info(f"REST request to get stocks by industry: {industry}")
    return crud.get_stocks_by_industry(db, industry)


@router.get("/{stock_id}", response_model=schemas.StockResponse)
def get_stock_by_id(stock_id: int, db: Session = Depends(get_db)):
    logger.info(f"REST request to get stock by ID: {stock_id}")
    return crud.get_stock_by_id(db, stock_id)


@router.put("/symbol/{symbol}", response_model=schemas.StockResponse)
def update_stock(
    symbol: str,
    request: schemas.StockUpdate,
    db: Session = Depends(get_db),
    events: EventService = Depends(get_event_service)
):
    """
    Updates the given fields of a stock. A price change is published
    to the price updates topic.
    """
    logger.info(f"REST request to update stock: {symbol}")
    return crud.update_stock(db, symbol, request, events)


@router.delete("/symbol/{symbol}", status_code=status.HTTP_204_NO_CONTENT)
def delete_stock(symbol: str, db: Session = Depends(get_db)):
    logger.info(f"REST request to delete stock: {symbol}")
    crud.delete_stock(db, symbol)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
