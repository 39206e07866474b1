"""
Logging setup

Structured fields are passed with ``extra=`` and rendered as key=value pairs
after the message.
"""

import logging
import sys

STRUCTURED_FIELDS = (
    'service',
    'method',
    'url',
    'status',
    'description',
    'correlation_id',
    'response_time',
    'error',
)

LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'


class KeyValueFormatter(logging.Formatter):
    """Append known structured fields to the formatted message"""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        pairs = [
            f'{name}={getattr(record, name)}'
            for name in STRUCTURED_FIELDS
            if getattr(record, name, None) is not None
        ]
        if pairs:
            message = f"{message} {' '.join(pairs)}"
        return message


def setup_logging(service_name: str, log_level: str = 'INFO') -> logging.Logger:
    """
    Configure the root logger for the service.

    Args:
        service_name: Name used for the service logger
        log_level: Level name (DEBUG, INFO, ...)

    Returns:
        The service logger
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(KeyValueFormatter(LOG_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        if isinstance(existing.formatter, KeyValueFormatter):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(log_level.upper())

    return logging.getLogger(service_name)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
