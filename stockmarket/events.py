# stockmarket/events.py

import json
from abc import ABC, abstractmethod
from typing import Optional
from kafka import KafkaProducer
from logger import logger
from stockmarket.config import Settings
from stockmarket.schemas import PriceChangeEvent, TransactionResponse


class EventPublisher(ABC):
    """Fire-and-forget publisher for topic messages."""

    @abstractmethod
    def publish(self, topic: str, key: str, payload: dict) -> None:
        """Sends payload to topic. Raises on failure."""

    def close(self) -> None:
        pass


class LoggingEventPublisher(EventPublisher):
    """Stands in for Kafka when it is disabled; messages are only logged."""

    def publish(self, topic: str, key: str, payload: dict) -> None:
        logger.info(f"[DEV MODE] Simulated publish to '{topic}' with key {key}: {payload}")


class KafkaEventPublisher(EventPublisher):
    """
    Publishes JSON messages through a kafka-python producer.

    The producer is created on first use so the application can start
    before the brokers are reachable.
    """

    def __init__(self, bootstrap_servers: str, producer: Optional[KafkaProducer] = None):
        self.bootstrap_servers = bootstrap_servers
        self._producer = producer

    def _get_producer(self) -> KafkaProducer:
        if self._producer is None:
            logger.info(f"Connecting Kafka producer to {self.bootstrap_servers}")
            self._producer = KafkaProducer(
                bootstrap_servers=self.bootstrap_servers.split(","),
                key_serializer=lambda key: key.encode("utf-8"),
                value_serializer=lambda value: json.dumps(value).encode("utf-8"),
                acks="all",
                retries=10,
            )
        return self._producer

    def publish(self, topic: str, key: str, payload: dict) -> None:
        future = self._get_producer().send(topic, key=key, value=payload)
        future.add_errback(
            lambda exc: logger.error(f"Kafka delivery to '{topic}' failed for key {key}: {exc}")
        )

    def close(self) -> None:
        if self._producer is not None:
            self._producer.flush()
            self._producer.close()
            self._producer = None


class EventService:
    """
    Sends domain events on a best-effort basis: publisher failures are
    logged and never propagate to the caller.
    """

    def __init__(
        self,
        publisher: EventPublisher,
        price_updates_topic: str = "stock-price-updates",
        transactions_topic: str = "stock-transactions",
    ):
        self.publisher = publisher
        self.price_updates_topic = price_updates_topic
        self.transactions_topic = transactions_topic

    def send_price_update(self, event: PriceChangeEvent) -> None:
        logger.info(f"Sending stock price update for symbol: {event.symbol}, price: {event.price}")
        self._send(self.price_updates_topic, event.symbol, event.model_dump(mode="json"))

    def send_transaction(self, transaction: TransactionResponse) -> None:
        logger.info(f"Sending transaction for symbol: {transaction.stock_symbol}")
        self._send(self.transactions_topic, transaction.stock_symbol, transaction.model_dump(mode="json"))

    def _send(self, topic: str, key: str, payload: dict) -> None:
        try:
            self.publisher.publish(topic, key, payload)
            logger.debug(f"Successfully sent message to '{topic}'")
        except Exception as e:
            logger.error(f"Failed to send message to '{topic}': {e}", exc_info=True)

    def close(self) -> None:
        self.publisher.close()


def build_event_service(settings: Settings) -> EventService:
    if settings.KAFKA_ENABLED:
        publisher: EventPublisher = KafkaEventPublisher(settings.KAFKA_BOOTSTRAP_SERVERS)
    else:
        logger.info("Kafka is disabled - using logging event publisher")
        publisher = LoggingEventPublisher()
    return EventService(
        publisher,
        price_updates_topic=settings.KAFKA_PRICE_UPDATES_TOPIC,
        transactions_topic=settings.KAFKA_TRANSACTIONS_TOPIC,
    )
