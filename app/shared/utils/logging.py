# 📄 File: app/shared/utils/logging.py

# 🧭 Purpose (Layman Explanation):
# This file sets up the logging system that records what happens in the app in a
# structured way, so that every line written while handling one request or one queue
# message can be traced back to it.

# 🧪 Purpose (Technical Summary):
# Implements structured logging with JSON formatting (python-json-logger) or a console
# format, plus request and correlation identifiers carried in context variables and
# injected into every record by a logging filter.

# 🔗 Dependencies:
# - python-json-logger: JSON log formatting
# - logging: Python standard logging
# - contextvars: Request context tracking

# 🔄 Connected Modules / Calls From:
# Used by: app.main (startup), app.api.middleware.error_handling (request ids),
# app.shared.events.consumer (correlation ids per message), every module through
# logging.getLogger(__name__)

import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from pythonjsonlogger import jsonlogger

from app.shared.config.settings import Settings

# Context variables for request tracking
request_id_var: ContextVar[str] = ContextVar('request_id', default='')
correlation_id_var: ContextVar[str] = ContextVar('correlation_id', default='')

SERVICE_NAME = 'ncfca-membership-api'


class ContextFilter(logging.Filter):
    """
    Adds request ID, correlation ID, hostname and service name to every
    record so both formatters can reference them.
    """

    def __init__(self, service_name: str = SERVICE_NAME):
        super().__init__()
        self.hostname = os.uname().nodename if hasattr(os, 'uname') else 'unknown'
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get('')
        record.correlation_id = correlation_id_var.get('')
        record.hostname = self.hostname
        record.service = self.service_name
        return True


class JSONFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter for structured logging.

    Outputs one JSON object per record with a consistent set of keys for
    log aggregation tools.
    """

    def __init__(self):
        super().__init__(
            '%(asctime)s %(levelname)s %(name)s %(message)s',
            rename_fields={'asctime': 'timestamp', 'levelname': 'level', 'name': 'logger'},
        )

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record['service'] = getattr(record, 'service', SERVICE_NAME)
        log_record['hostname'] = getattr(record, 'hostname', '')
        if getattr(record, 'request_id', ''):
            log_record['request_id'] = record.request_id
        if getattr(record, 'correlation_id', ''):
            log_record['correlation_id'] = record.correlation_id


CONSOLE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s%(correlation_id)s] %(message)s'


def setup_logging(settings: Settings) -> logging.Logger:
    """
    Setup application logging configuration.

    Replaces the root handlers with a single stdout handler using the JSON or
    console formatter selected by ``LOG_FORMAT``.

    Args:
        settings: Application settings providing LOG_LEVEL and LOG_FORMAT

    Returns:
        logging.Logger: The startup logger
    """
    numeric_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    if settings.LOG_FORMAT == 'json':
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(CONSOLE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(ContextFilter())
    root_logger.addHandler(console_handler)

    logging.getLogger('amqp').setLevel(logging.WARNING)
    logging.getLogger('kombu').setLevel(logging.WARNING)
    logging.getLogger('asyncio').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy.engine').setLevel(
        logging.INFO if settings.DB_ECHO else logging.WARNING
    )

    return logging.getLogger('startup')


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""
    return logging.getLogger(name)


@contextmanager
def log_context(
    request_id: Optional[str] = None,
    correlation_id: Optional[str] = None,
) -> Iterator[None]:
    """
    Bind request/correlation identifiers for the duration of a block.

    Example:
        with log_context(correlation_id=event.metadata.event_id):
            await handler(event)
    """
    tokens = []
    if request_id is not None:
        tokens.append((request_id_var, request_id_var.set(request_id)))
    if correlation_id is not None:
        tokens.append((correlation_id_var, correlation_id_var.set(correlation_id)))
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)
