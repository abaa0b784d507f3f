from loguru import logger
import os

from app.core.config import LOG_DIR

# Create folder if missing
if not os.path.exists(LOG_DIR):
    os.makedirs(LOG_DIR)

# Remove default handler
logger.remove()

# General application log
logger.add(
    f"{LOG_DIR}/app.log",
    rotation="1 week",
    retention="4 weeks",
    level="INFO",
    enqueue=True,
    format="{time} | {level} | {message}"
)


def _channel(log_type: str):
    return lambda record: record["extra"].get("log_type") == log_type


# Booking intake logs
logger.add(
    f"{LOG_DIR}/bookings.log",
    rotation="1 week",
    retention="4 weeks",
    level="INFO",
    enqueue=True,
    filter=_channel("booking"),
    format="{time} | {level} | {message}"
)

# Rate catalog lookups and quotes
logger.add(
    f"{LOG_DIR}/pricing.log",
    rotation="1 week",
    retention="4 weeks",
    level="INFO",
    enqueue=True,
    filter=_channel("pricing"),
    format="{time} | {level} | {message}"
)

# Admin activity logs
logger.add(
    f"{LOG_DIR}/admin.log",
    rotation="1 week",
    retention="4 weeks",
    level="INFO",
    enqueue=True,
    filter=_channel("admin"),
    format="{time} | {level} | {message}"
)

# Outbound email
logger.add(
    f"{LOG_DIR}/notifications.log",
    rotation="1 week",
    retention="4 weeks",
    level="INFO",
    enqueue=True,
    filter=_channel("notification"),
    format="{time} | {level} | {message}"
)

# Error logs
logger.add(
    f"{LOG_DIR}/errors.log",
    rotation="1 week",
    retention="8 weeks",
    level="ERROR",
    enqueue=True,
)


def get_logger():
    return logger
