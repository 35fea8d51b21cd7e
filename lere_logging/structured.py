"""
Structured JSON Logger
=====================

Bounded Context: Observability Infrastructure

One JSON object per log record, so server operators can grep or ship the
add-on's logs without parsing free text.

Design:
- Wraps Python's logging module (handlers, levels, propagation untouched)
- Typed events (LogEvent enum)
- Contextual metadata (zone_id, world, identity, ...)

Example:
    >>> logger = StructuredLogger(component="zones")
    >>> logger.warning(
    ...     event=LogEvent.ZONE_SKIPPED,
    ...     message="Zone 'arena' references unknown world 'nether'; skipping.",
    ...     metadata={'zone_id': 'arena', 'world': 'nether'}
    ... )

Output:
    {
        "timestamp": "2026-10-19T15:30:45.123456",
        "level": "WARNING",
        "component": "zones",
        "event": "zone.skipped",
        "message": "Zone 'arena' references unknown world 'nether'; skipping.",
        "metadata": {"zone_id": "arena", "world": "nether"}
    }
"""

import json
import logging
import math
from datetime import datetime, timezone
from typing import Dict, Any, Optional
from .events import LogEvent


class StructuredLogger:
    """
    JSON structured logger.

    Attributes:
        component: Component name (e.g., "zones", "access")
        logger: Underlying Python logger instance
    """

    def __init__(
        self,
        component: str,
        level: int = logging.INFO,
        logger_name: Optional[str] = None
    ):
        """
        Initialize structured logger.

        Args:
            component: Component identifier (e.g., "zones")
            level: Logging level (default: INFO)
            logger_name: Custom logger name (default: lere.<component>)
        """
        self.component = component
        self.logger_name = logger_name or f"lere.{component}"
        self.logger = logging.getLogger(self.logger_name)
        self.logger.setLevel(level)

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(JSONFormatter())
            self.logger.addHandler(handler)

    def _log(
        self,
        level: str,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None
    ) -> None:
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': level,
            'component': self.component,
            'event': event.value,
            'message': message,
        }

        if metadata:
            log_entry['metadata'] = _json_safe(metadata)

        if exc_info:
            log_entry['exception'] = {
                'type': type(exc_info).__name__,
                'message': str(exc_info)
            }

        log_level = getattr(logging, level)
        self.logger.log(
            log_level,
            json.dumps(log_entry, default=str),
            exc_info=exc_info if level == 'ERROR' else None
        )

    def info(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log INFO level message."""
        self._log('INFO', event, message, metadata)

    def warning(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None
    ) -> None:
        """
        Log WARNING level message.

        The exception, when given, is summarised into the JSON payload but no
        traceback is attached; warnings here describe recoverable conditions.
        """
        self._log('WARNING', event, message, metadata, exc_info)

    def error(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[BaseException] = None
    ) -> None:
        """
        Log ERROR level message.

        Args:
            event: Typed log event
            message: Human-readable message
            metadata: Additional context
            exc_info: Exception instance for traceback
        """
        self._log('ERROR', event, message, metadata, exc_info)


def _json_safe(value: Any) -> Any:
    # NaN and Infinity have no JSON literal; they are written as strings
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    return value


class JSONFormatter(logging.Formatter):
    """Pass-through formatter: StructuredLogger already produced the JSON."""

    def format(self, record: logging.LogRecord) -> str:
        return record.getMessage()


def create_logger(
    component: str,
    level: int = logging.INFO
) -> StructuredLogger:
    """
    Factory function to create configured StructuredLogger.

    Example:
        >>> logger = create_logger("access", level=logging.DEBUG)
    """
    return StructuredLogger(component=component, level=level)
