"""
Structured Logging for Lere Multiplayer
=======================================

Bounded Context: Observability

Public API
----------
    LogEvent: Typed event names (enum)
    StructuredLogger: JSON logger implementation
    create_logger: Factory function

Example:
    >>> from lere_logging import create_logger, LogEvent
    >>> logger = create_logger("access")
    >>> logger.info(
    ...     event=LogEvent.ACCESS_LOADED,
    ...     message="Loaded whitelist: 3 entries",
    ...     metadata={'count': 3}
    ... )
"""

from .events import LogEvent
from .structured import StructuredLogger, create_logger

__all__ = [
    'LogEvent',
    'StructuredLogger',
    'create_logger',
]
