"""
Structured Logging Configuration Module

One JSON object per line for ATM dispatch results, under the ``atm`` logger
tree. Card numbers are masked before they reach a log record.
"""

import logging
import json
from datetime import datetime, timezone
from typing import Optional

# Record attributes set by log_action, emitted only when present
STRUCTURED_FIELDS = ("action", "resource", "extra")


class JSONFormatter(logging.Formatter):

    def format(self, record):
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in STRUCTURED_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = value

        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "INFO", logger_name: str = "atm", fmt: str = "json") -> logging.Logger:
    """
    Attach a single stderr handler to ``logger_name``.

    Calling it again replaces the previous handler. ``fmt`` is "json" or
    "text"; the logger stops propagating to the root logger.
    """
    logger = logging.getLogger(logger_name)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper()))
    logger.propagate = False
    return logger


def get_logger(name: str = "atm") -> logging.Logger:
    return logging.getLogger(name)


def log_action(logger: logging.Logger, level: str, message: str,
               action: Optional[str] = None, resource: Optional[str] = None,
               extra: Optional[dict] = None):
    """
    Log ``message`` with the dispatched action, the masked card it ran
    against, and outcome details in ``extra``.
    """
    levelno = getattr(logging, level.upper())
    if not logger.isEnabledFor(levelno):
        return

    record = logger.makeRecord(
        logger.name, levelno, __name__, 0, message, (), None
    )
    for field, value in zip(STRUCTURED_FIELDS, (action, resource, extra)):
        if value:
            setattr(record, field, value)

    logger.handle(record)


def mask_card_id(card_id: str) -> str:
    """Keep only the last four digits of a card number for logs"""
    digits = "".join(ch for ch in card_id if ch.isdigit())
    if len(digits) <= 4:
        return "*" * len(digits)
    return "*" * (len(digits) - 4) + digits[-4:]
