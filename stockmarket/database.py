# stockmarket/database.py

import time
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.exc import OperationalError
from logger import logger
from stockmarket.config import settings

DATABASE_URL = settings.database_url


def make_engine(url: str):
    """
    Creates a SQLAlchemy engine; SQLite gets a thread-safe connection,
    server databases get a connection pool.
    """
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url, pool_size=10, max_overflow=20)


# SQLAlchemy setup
Base = declarative_base()
engine = make_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Retry logic to wait for the database to be ready
MAX_RETRIES = 5
RETRY_INTERVAL = 5  # seconds


def init_db(bind=None) -> None:
    """
    Creates all tables, retrying while the database is still starting up.

    Args:
        bind: Engine to use. Defaults to the application engine.
    """
    # Models must be registered on Base.metadata before create_all
    import stockmarket.models  # noqa: F401

    bind = bind or engine
    for attempt in range(MAX_RETRIES):
        try:
            Base.metadata.create_all(bind=bind)
            logger.info("Database connected and tables created successfully.")
            break
        except OperationalError as oe:
            if attempt < MAX_RETRIES - 1:
                logger.warning(
                    f"Database connection failed on attempt {attempt + 1}. Retrying in {RETRY_INTERVAL} seconds..."
                )
                time.sleep(RETRY_INTERVAL)
            else:
                logger.error("Max retries reached. Exiting.")
                raise oe


# Dependency to get database session
def get_db() -> Session:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
