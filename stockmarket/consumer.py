# stockmarket/consumer.py
"""Logs the price updates and transactions published to Kafka.

Run with ``python -m stockmarket.consumer``.
"""

import json
from kafka import KafkaConsumer
from logger import logger
from stockmarket.config import Settings, settings as default_settings


def handle_message(topic: str, payload: dict, settings: Settings = default_settings) -> None:
    if topic == settings.KAFKA_PRICE_UPDATES_TOPIC:
        logger.info(
            f"Received stock price update for symbol: {payload.get('symbol')}, price: {payload.get('price')}"
        )
    elif topic == settings.KAFKA_TRANSACTIONS_TOPIC:
        logger.info(
            f"Received transaction for symbol: {payload.get('stock_symbol')}, "
            f"quantity: {payload.get('quantity')}, type: {payload.get('type')}"
        )
    else:
        logger.warning(f"Ignoring message from unexpected topic: {topic}")


def build_consumer(settings: Settings = default_settings) -> KafkaConsumer:
    return KafkaConsumer(
        settings.KAFKA_PRICE_UPDATES_TOPIC,
        settings.KAFKA_TRANSACTIONS_TOPIC,
        bootstrap_servers=settings.KAFKA_BOOTSTRAP_SERVERS.split(","),
        group_id=settings.KAFKA_CONSUMER_GROUP_ID,
        key_deserializer=lambda key: key.decode("utf-8") if key else None,
        value_deserializer=lambda value: json.loads(value.decode("utf-8")),
        auto_offset_reset="earliest",
    )


def consume(consumer: KafkaConsumer, settings: Settings = default_settings) -> None:
    """Handles messages until the consumer is closed or the process is interrupted."""
    try:
        for message in consumer:
            handle_message(message.topic, message.value, settings)
    finally:
        consumer.close()


if __name__ == "__main__":
    logger.info("Starting Kafka consumer")
    try:
        consume(build_consumer())
    except KeyboardInterrupt:
        logger.info("Kafka consumer stopped")
