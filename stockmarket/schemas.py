# stockmarket/schemas.py

from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from typing import Optional, Dict
from stockmarket.models import TransactionType


class StockCreate(BaseModel):
    symbol: str = Field(..., min_length=1, max_length=16)
    company_name: str = Field(..., min_length=1)
    current_price: Decimal = Field(..., gt=0, max_digits=19, decimal_places=2)
    previous_close: Optional[Decimal] = Field(default=None, gt=0, max_digits=19, decimal_places=2)
    volume: Optional[int] = Field(default=None, ge=0)
    sector: Optional[str] = None
    industry: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "symbol": "AAPL",
                "company_name": "Apple Inc.",
                "current_price": "194.50",
                "previous_close": "192.75",
                "volume": 35000000,
                "sector": "Technology",
                "industry": "Consumer Electronics"
            }
        }


class StockUpdate(BaseModel):
    company_name: Optional[str] = Field(default=None, min_length=1)
    current_price: Optional[Decimal] = Field(default=None, gt=0, max_digits=19, decimal_places=2)
    previous_close: Optional[Decimal] = Field(default=None, gt=0, max_digits=19, decimal_places=2)
    volume: Optional[int] = Field(default=None, ge=0)
    sector: Optional[str] = None
    industry: Optional[str] = None


class StockResponse(BaseModel):
    id: int
    symbol: str
    company_name: str
    current_price: Decimal
    previous_close: Optional[Decimal] = None
    change: Optional[Decimal] = None
    change_percent: Optional[Decimal] = None
    volume: Optional[int] = None
    last_updated: Optional[datetime] = None
    sector: Optional[str] = None
    industry: Optional[str] = None

    class Config:
        from_attributes = True


class TransactionCreate(BaseModel):
    type: TransactionType
    stock_symbol: str = Field(..., min_length=1, max_length=16)
    quantity: int = Field(..., gt=0)
    price_per_share: Decimal = Field(..., gt=0, max_digits=19, decimal_places=2)
    user_id: Optional[str] = None
    portfolio_id: Optional[int] = None
    notes: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "type": "BUY",
                "stock_symbol": "AAPL",
                "quantity": 10,
                "price_per_share": "194.50",
                "notes": "Initial position"
            }
        }


class TransactionUpdate(BaseModel):
    type: Optional[TransactionType] = None
    stock_symbol: Optional[str] = Field(default=None, min_length=1, max_length=16)
    quantity: Optional[int] = Field(default=None, gt=0)
    price_per_share: Optional[Decimal] = Field(default=None, gt=0, max_digits=19, decimal_places=2)
    notes: Optional[str] = None


class TransactionResponse(BaseModel):
    id: int
    type: TransactionType
    stock_symbol: str
    quantity: int
    price_per_share: Decimal
    total_value: Decimal
    timestamp: datetime
    user_id: Optional[str] = None
    portfolio_id: Optional[int] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class StockSummaryResponse(BaseModel):
    symbol: str
    total_transactions: int
    average_price: Optional[float] = None
    total_volume: Optional[int] = None


class PriceChangeEvent(BaseModel):
    """Message published on the price updates topic; never persisted."""
    symbol: str
    price: Decimal
    change: Decimal
    change_percent: Decimal
    timestamp: datetime

    class Config:
        json_schema_extra = {
            "example": {
                "symbol": "AAPL",
                "price": "151.50",
                "change": "1.50",
                "change_percent": "1.00",
                "timestamp": "2024-12-04T15:30:00"
            }
        }


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    timestamp: datetime
    status: int
    error: str
    message: str
    validation_errors: Optional[Dict[str, str]] = None
