"""stockmarket/config.py

Configuration management using Pydantic BaseSettings.
Loads from environment variables and .env file.
"""

from typing import Optional
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    APP_NAME: str = Field(default="Stock Market Application")
    PORT: int = Field(default=8000)

    # Database Configuration
    DATABASE_URL: str = Field(default="sqlite:///./stockmarket.db")
    SEED_DATA: bool = Field(default=True)

    # Price simulator
    SIMULATOR_ENABLED: bool = Field(default=True)
    SIMULATOR_INTERVAL_SECONDS: float = Field(default=30.0, gt=0)
    SIMULATOR_MIN_CHANGE_PERCENT: float = Field(default=-5.0)
    SIMULATOR_MAX_CHANGE_PERCENT: float = Field(default=5.0)
    SIMULATOR_SEED: Optional[int] = Field(default=None)

    # Kafka Configuration (disabled: messages are only logged)
    KAFKA_ENABLED: bool = Field(default=False)
    KAFKA_BOOTSTRAP_SERVERS: str = Field(default="localhost:9092")
    KAFKA_PRICE_UPDATES_TOPIC: str = Field(default="stock-price-updates")
    KAFKA_TRANSACTIONS_TOPIC: str = Field(default="stock-transactions")
    KAFKA_CONSUMER_GROUP_ID: str = Field(default="stock-market-group")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore"
    }

    @model_validator(mode="after")
    def check_change_bounds(self):
        if self.SIMULATOR_MIN_CHANGE_PERCENT > self.SIMULATOR_MAX_CHANGE_PERCENT:
            raise ValueError(
                "SIMULATOR_MIN_CHANGE_PERCENT must not exceed SIMULATOR_MAX_CHANGE_PERCENT"
            )
        return self

    @property
    def database_url(self) -> str:
        # Heroku-style URLs are not accepted by SQLAlchemy
        if self.DATABASE_URL.startswith('postgres://'):
            return self.DATABASE_URL.replace('postgres://', 'postgresql://', 1)
        return self.DATABASE_URL


# Global settings instance
settings = Settings()
