# stockmarket/seed.py

from datetime import datetime
from decimal import Decimal
from sqlalchemy.orm import Session
from logger import logger
from stockmarket import logic
from stockmarket.models import Stock

# symbol, company name, price, previous close, volume, sector, industry
SAMPLE_STOCKS = [
    ("AAPL", "Apple Inc.", "194.50", "192.75", 35000000, "Technology", "Consumer Electronics"),
    ("MSFT", "Microsoft Corporation", "423.10", "421.80", 22000000, "Technology", "Software"),
    ("GOOGL", "Alphabet Inc.", "175.85", "173.20", 18500000, "Technology", "Internet Services"),
    ("AMZN", "Amazon.com Inc.", "182.90", "180.50", 27800000, "Consumer Discretionary", "E-Commerce"),
    ("META", "Meta Platforms Inc.", "473.28", "465.40", 19600000, "Communication Services", "Social Media"),
    ("TSLA", "Tesla Inc.", "248.50", "252.70", 32100000, "Consumer Discretionary", "Automotive"),
    ("NVDA", "NVIDIA Corporation", "124.65", "122.30", 42500000, "Technology", "Semiconductors"),
    ("JPM", "JPMorgan Chase & Co.", "198.30", "197.50", 8900000, "Financials", "Banking"),
    ("V", "Visa Inc.", "275.15", "273.80", 7400000, "Financials", "Payment Processing"),
    ("JNJ", "Johnson & Johnson", "158.90", "159.40", 6200000, "Healthcare", "Pharmaceuticals"),
]


def seed_stocks(db: Session) -> int:
    """
    Inserts the sample stocks into an empty database.

    Args:
        db (Session): SQLAlchemy session.

    Returns:
        int: Number of stocks added (0 if the table already had data).
    """
    if db.query(Stock).count() > 0:
        logger.info("Database already has data, skipping initialization")
        return 0

    logger.info("Initializing database with sample stocks...")
    now = datetime.now()
    for symbol, company_name, price, previous_close, volume, sector, industry in SAMPLE_STOCKS:
        current_price = Decimal(price)
        previous = Decimal(previous_close)
        change, change_percent = logic.compute_change(current_price, previous)
        db.add(Stock(
            symbol=symbol,
            company_name=company_name,
            current_price=current_price,
            previous_close=previous,
            change=change,
            change_percent=change_percent,
            volume=volume,
            last_updated=now,
            sector=sector,
            industry=industry
        ))
    db.commit()
    logger.info(f"Sample data initialization complete. Added {len(SAMPLE_STOCKS)} stocks.")
    return len(SAMPLE_STOCKS)
