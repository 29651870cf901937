# logger.py

import logging
import os

# Initialize Logger
logger = logging.getLogger("stockmarket_api")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logger.setLevel(LOG_LEVEL)  # Set LOG_LEVEL=DEBUG for more verbose output

# Create handlers
console_handler = logging.StreamHandler()
console_handler.setLevel(LOG_LEVEL)

# Create formatter and add it to the handlers
formatter = logging.Formatter(
    '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
console_handler.setFormatter(formatter)

# Add handlers to the logger
if not logger.hasHandlers():
    logger.addHandler(console_handler)
