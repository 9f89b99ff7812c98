"""Console backend writing formatted records to stderr."""

import sys
from datetime import datetime
from typing import TextIO, Optional

from ..interfaces import LogBackend, LogRecord, LogLevel, LogType
from ..structs import ConsoleBackendConfig


_LEVEL_COLORS = {
    LogLevel.DEBUG: "\033[36m",
    LogLevel.INFO: "\033[32m",
    LogLevel.WARNING: "\033[33m",
    LogLevel.ERROR: "\033[31m",
    LogLevel.CRITICAL: "\033[35m",
}
_RESET = "\033[0m"


class ConsoleBackend(LogBackend):
    """Immediate, unbuffered console output."""

    def __init__(self, config: ConsoleBackendConfig, name: str = "console",
                 stream: Optional[TextIO] = None):
        if not isinstance(config, ConsoleBackendConfig):
            raise TypeError(f"Expected ConsoleBackendConfig, got {type(config)}")

        super().__init__(name)
        self.config = config
        self.min_level = LogLevel[config.min_level.upper()]
        self.enabled = config.enabled
        self.stream = stream

    def should_handle(self, record: LogRecord) -> bool:
        if not self.enabled:
            return False
        if record.log_type == LogType.METRIC and not self.config.include_metrics:
            return False
        return record.level >= self.min_level

    def write_sync(self, record: LogRecord) -> None:
        stream = self.stream or sys.stderr
        stream.write(self._format(record) + "\n")

    async def flush(self) -> None:
        (self.stream or sys.stderr).flush()

    def _format(self, record: LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.timestamp).strftime("%H:%M:%S.%f")[:-3]
        level = record.level.name
        if self.config.color:
            level = f"{_LEVEL_COLORS.get(record.level, '')}{level}{_RESET}"

        if record.log_type == LogType.METRIC:
            message = f"{record.metric_name}={record.metric_value}"
            extra = record.metric_tags or {}
        else:
            message = record.message
            extra = record.context

        if len(message) > self.config.max_message_length:
            message = message[:self.config.max_message_length] + "..."

        line = f"{timestamp} {level} [{record.logger_name}] {message}"
        if self.config.include_context and extra:
            line += " | " + ", ".join(f"{k}={v}" for k, v in extra.items())
        if record.exchange:
            line += f" | exchange={record.exchange}"
        return line
