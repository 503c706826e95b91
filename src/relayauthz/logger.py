"""
Structured logging setup.

Lines are written as one JSON object each. Callers never write to the
stream themselves: get_logger installs a QueueHandler, and a QueueListener
thread owns the stream handler, so a slow or stalled stdout cannot hold up
the thread that logged.
"""

import json
import logging
import queue
import sys
import threading
import time
from logging.handlers import QueueHandler, QueueListener

from .config import DEFAULT_LOG_LEVEL, LOG_TIMESTAMP_FORMAT, ROOT_LOGGER_NAME

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

# logger name -> (queue handler, listener)
_listeners = {}
_listeners_lock = threading.Lock()


def parse_log_level(level):
    """Map a configured level name to a logging level; unknown names mean ERROR."""
    if not isinstance(level, str):
        return _LEVELS[DEFAULT_LOG_LEVEL]
    return _LEVELS.get(level.strip().upper(), _LEVELS[DEFAULT_LOG_LEVEL])


class JsonLineFormatter(logging.Formatter):
    """One JSON object per line; audit payloads are embedded as objects."""

    converter = time.gmtime  # UTC timestamps

    def __init__(self):
        super().__init__(datefmt=LOG_TIMESTAMP_FORMAT)

    def format(self, record):
        line = {
            "ts": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
        }
        audit = getattr(record, "audit", None)
        if audit is not None:
            line["audit"] = audit
        else:
            line["msg"] = record.getMessage()
        if record.exc_info:
            line["exc"] = self.formatException(record.exc_info)
        return json.dumps(line, sort_keys=True)


class JsonLineHandler(logging.StreamHandler):
    """
    Stream handler for JSON lines.

    A record that fails to be written is reported back through its
    on_drop callback, when it carries one, before the usual stderr report.
    """

    def __init__(self, stream=None):
        super().__init__(stream or sys.stdout)
        self.setFormatter(JsonLineFormatter())

    def handleError(self, record):
        on_drop = getattr(record, "on_drop", None)
        if on_drop is not None:
            on_drop()
        super().handleError(record)


def get_logger(name=ROOT_LOGGER_NAME, level=logging.INFO, stream=None):
    """
    Structured line logger shared by all relay-authz components.

    The first call for a name starts its background writer; later calls
    only change the level.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    with _listeners_lock:
        if not logger.handlers:
            _stop_listener(name)
            records = queue.SimpleQueue()
            listener = QueueListener(records, JsonLineHandler(stream))
            handler = QueueHandler(records)
            logger.addHandler(handler)
            listener.start()
            _listeners[name] = (handler, listener)

    return logger


def _stop_listener(name):
    entry = _listeners.pop(name, None)
    if entry is None:
        return
    handler, listener = entry
    logging.getLogger(name).removeHandler(handler)
    # Drains everything queued so far before returning
    listener.stop()


def shutdown_logging():
    """Flush and stop every background writer started by get_logger."""
    with _listeners_lock:
        for name in list(_listeners):
            _stop_listener(name)
