"""
Structured Logger Implementation

Dispatches records synchronously to backends on the calling thread, so a
logger can be shared across threads and event loops without a background
task. Backends that buffer (file) write once full and are drained via
``flush()``.
"""

import logging
import time
from typing import Any, Dict, List

from .interfaces import HFTLoggerInterface, LogBackend, LogRecord, LogLevel, LogType


class HFTLogger(HFTLoggerInterface):
    """
    Logger with persistent context and multiple backends.

    Key features:
    - Context management (exchange, correlation id)
    - Metrics alongside text records
    - Python logging compatibility (isEnabledFor / log)
    """

    def __init__(self, name: str, backends: List[LogBackend], context: Dict[str, Any] | None = None):
        self.name = name
        self.backends = backends
        self.context: Dict[str, Any] = dict(context or {})

    def _dispatch(self, record: LogRecord) -> None:
        for backend in self.backends:
            if backend.enabled and backend.should_handle(record):
                try:
                    backend.write_sync(record)
                except Exception as e:
                    backend._handle_error(e)

    def _log(self, level: LogLevel, msg: str, log_type: LogType = LogType.TEXT, **context) -> None:
        full_context = {**self.context, **context}

        correlation_id = full_context.pop('correlation_id', None)
        exchange = full_context.pop('exchange', None)

        if log_type == LogType.AUDIT:
            record = LogRecord.create_audit(self.name, msg, **full_context)
        else:
            record = LogRecord.create_text(level, self.name, msg, **full_context)
        record.correlation_id = correlation_id
        record.exchange = exchange

        self._dispatch(record)

    # Standard logging methods
    def debug(self, msg: str, **context) -> None:
        """Log debug message."""
        self._log(LogLevel.DEBUG, msg, **context)

    def info(self, msg: str, **context) -> None:
        """Log info message."""
        self._log(LogLevel.INFO, msg, **context)

    def warning(self, msg: str, **context) -> None:
        """Log warning message."""
        self._log(LogLevel.WARNING, msg, **context)

    def error(self, msg: str, **context) -> None:
        """Log error message."""
        self._log(LogLevel.ERROR, msg, **context)

    def critical(self, msg: str, **context) -> None:
        """Log critical message."""
        self._log(LogLevel.CRITICAL, msg, **context)

    def metric(self, name: str, value: float, **tags) -> None:
        """Log metric value."""
        full_tags = {**self.context, **tags}
        correlation_id = full_tags.pop('correlation_id', None)
        exchange = full_tags.pop('exchange', None)

        record = LogRecord.create_metric(self.name, name, value, **full_tags)
        record.correlation_id = correlation_id
        record.exchange = exchange

        self._dispatch(record)

    def latency(self, operation: str, duration_ms: float, **tags) -> None:
        """Log latency metric."""
        self.metric(f"{operation}_latency_ms", duration_ms, **tags)

    def counter(self, name: str, value: int = 1, **tags) -> None:
        """Log counter metric."""
        self.metric(f"{name}_count", float(value), **tags)

    def audit(self, event: str, **context) -> None:
        """Log audit event."""
        self._log(LogLevel.INFO, event, LogType.AUDIT, **context)

    def set_context(self, **context) -> None:
        """Set persistent context for all logs."""
        self.context.update(context)

    async def flush(self) -> None:
        """Flush all backends."""
        for backend in self.backends:
            try:
                await backend.flush()
            except Exception as e:
                backend._handle_error(e)

    # Python logging compatibility
    def isEnabledFor(self, level: int) -> bool:
        """Check if any enabled backend accepts records at this level."""
        our_level = self._convert_py_level(level)
        probe = LogRecord.create_text(our_level, self.name, "")
        return any(b.enabled and b.should_handle(probe) for b in self.backends)

    def log(self, level: int, msg: str, *args, **kwargs) -> None:
        """Generic log method for Python logging compatibility."""
        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                pass
        self._log(self._convert_py_level(level), msg, **kwargs)

    def _convert_py_level(self, py_level: int) -> LogLevel:
        """Convert Python logging level to our LogLevel."""
        if py_level >= logging.CRITICAL:
            return LogLevel.CRITICAL
        elif py_level >= logging.ERROR:
            return LogLevel.ERROR
        elif py_level >= logging.WARNING:
            return LogLevel.WARNING
        elif py_level >= logging.INFO:
            return LogLevel.INFO
        else:
            return LogLevel.DEBUG


class NullLogger(HFTLoggerInterface):
    """No-op logger. Default for client components when the caller injects none."""

    name = "null"

    def debug(self, msg: str, **context) -> None:
        pass

    def info(self, msg: str, **context) -> None:
        pass

    def warning(self, msg: str, **context) -> None:
        pass

    def error(self, msg: str, **context) -> None:
        pass

    def critical(self, msg: str, **context) -> None:
        pass

    def metric(self, name: str, value: float, **tags) -> None:
        pass

    def latency(self, operation: str, duration_ms: float, **tags) -> None:
        pass

    def counter(self, name: str, value: int = 1, **tags) -> None:
        pass

    def audit(self, event: str, **context) -> None:
        pass

    def set_context(self, **context) -> None:
        pass

    async def flush(self) -> None:
        pass

    def isEnabledFor(self, level: int) -> bool:
        return False

    def log(self, level: int, msg: str, *args, **kwargs) -> None:
        pass


# Context manager for timing operations
class LoggingTimer:
    """Context manager for timing operations with automatic logging."""

    def __init__(self, logger: HFTLoggerInterface, operation: str, **tags):
        self.logger = logger
        self.operation = operation
        self.tags = tags
        self.start_time = None
        self.end_time = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.start_time is not None:
            self.end_time = time.perf_counter()
            duration_ms = (self.end_time - self.start_time) * 1000
            self.logger.latency(self.operation, duration_ms, **self.tags)

        if exc_type is not None:
            self.logger.error(f"{self.operation} failed",
                              error_type=exc_type.__name__,
                              **self.tags)

    @property
    def elapsed_ms(self) -> float:
        """Get elapsed time in milliseconds."""
        if self.start_time is None:
            return 0.0
        end_time = self.end_time or time.perf_counter()
        return (end_time - self.start_time) * 1000
