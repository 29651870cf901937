# stockmarket/models.py

import enum
from sqlalchemy import Column, Integer, BigInteger, String, Numeric, DateTime, Enum
from stockmarket.database import Base


class TransactionType(str, enum.Enum):
    BUY = "BUY"
    SELL = "SELL"


class Stock(Base):
    __tablename__ = "stocks"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    symbol = Column(String(16), unique=True, index=True, nullable=False)
    company_name = Column(String, nullable=False)
    current_price = Column(Numeric(19, 2), nullable=False)  # Always > 0
    previous_close = Column(Numeric(19, 2))
    change = Column(Numeric(19, 2))  # current_price - previous_close
    change_percent = Column(Numeric(19, 4))
    volume = Column(BigInteger)
    last_updated = Column(DateTime)
    sector = Column(String, index=True)
    industry = Column(String, index=True)

    def __repr__(self) -> str:
        return f"<Stock {self.symbol} {self.current_price}>"


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    type = Column(Enum(TransactionType, name="transaction_type"), nullable=False)
    stock_symbol = Column(String(16), index=True, nullable=False)
    quantity = Column(Integer, nullable=False)
    price_per_share = Column(Numeric(19, 2), nullable=False)
    total_value = Column(Numeric(19, 2), nullable=False)  # quantity * price_per_share
    timestamp = Column(DateTime, nullable=False)
    user_id = Column(String)
    portfolio_id = Column(Integer)
    notes = Column(String)
