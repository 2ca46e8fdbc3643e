"""Logging setup for the ``object_digest`` package.

By default only the package logger's level is set from
``OBJECT_DIGEST_LOG_LEVEL``. With ``structured=True`` records are also pushed
through a bounded queue to a JSON line writer, so digest computations never
block on a slow log stream::

    listener = configure_logging(structured=True, trace_id="batch-42")
    ...
    stop_structured_logging(listener)
"""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime, timezone
from queue import Full, Queue
from typing import IO, override
from uuid import uuid4

from object_digest.settings import ObjectDigestSettings, get_settings

__all__ = [
    "DigestQueueHandler",
    "JsonFormatter",
    "configure_logging",
    "stop_structured_logging",
]

LOGGER = logging.getLogger(__name__)

PACKAGE_LOGGER_NAME = "object_digest"
QUEUE_CAPACITY = 1024

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RECORD_ATTRIBUTES = frozenset(vars(logging.makeLogRecord({}))) | {
    "message",
    "asctime",
    "trace_id",
}


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with ``extra`` values under ``context``."""

    def __init__(self, trace_id: str) -> None:
        super().__init__()
        self._trace_id = trace_id

    @override
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "trace_id": getattr(record, "trace_id", None) or self._trace_id,
            "context": {
                key: value
                for key, value in vars(record).items()
                if key not in _RECORD_ATTRIBUTES
            },
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class DigestQueueHandler(logging.handlers.QueueHandler):
    """Queue handler that counts and discards records once the queue is full."""

    def __init__(self, queue: Queue[logging.LogRecord]) -> None:
        super().__init__(queue)
        self.dropped = 0

    @override
    def enqueue(self, record: logging.LogRecord) -> None:
        try:
            self.queue.put_nowait(record)
        except Full:
            self.dropped += 1


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    if isinstance(level, int):
        return level
    LOGGER.warning("Unknown log level %r; using WARNING", name)
    return logging.WARNING


def configure_logging(
    settings: ObjectDigestSettings | None = None,
    *,
    structured: bool = False,
    trace_id: str | None = None,
    stream: IO[str] | None = None,
) -> logging.handlers.QueueListener | None:
    """Apply the configured log level to the ``object_digest`` logger.

    Args:
        settings: Optional settings override; defaults to :func:`get_settings`.
        structured: When ``True`` also route package records to JSON lines.
            A previously attached queue handler is replaced.
        trace_id: Trace identifier stamped on records that do not carry one
            in ``extra``; a random one is generated when omitted.
        stream: Destination of the JSON lines; defaults to ``sys.stderr``.

    Returns:
        The running queue listener when ``structured`` is set, otherwise
        ``None``. Pass it to :func:`stop_structured_logging` when done.
    """

    effective = settings or get_settings()
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    logger.setLevel(_resolve_level(effective.log_level))
    if not structured:
        return None

    for handler in [h for h in logger.handlers if isinstance(h, DigestQueueHandler)]:
        logger.removeHandler(handler)
    records: Queue[logging.LogRecord] = Queue(maxsize=QUEUE_CAPACITY)
    logger.addHandler(DigestQueueHandler(records))

    writer = logging.StreamHandler(stream)
    writer.setFormatter(JsonFormatter(trace_id or uuid4().hex))
    listener = logging.handlers.QueueListener(records, writer)
    listener.start()
    return listener


def stop_structured_logging(listener: logging.handlers.QueueListener) -> None:
    """Flush ``listener`` and detach the package's queue handler."""

    listener.stop()
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    for handler in [h for h in logger.handlers if isinstance(h, DigestQueueHandler)]:
        if handler.queue is listener.queue:
            logger.removeHandler(handler)
            if handler.dropped:
                LOGGER.warning("Structured log queue dropped %d records", handler.dropped)
