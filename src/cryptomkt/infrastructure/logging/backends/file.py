"""
File Backend for Persistent Logging

Buffers formatted records in memory and appends them to a file with async
I/O on flush, or once the buffer is full. Supports text and JSON-lines formats.
"""

import asyncio
import json
import threading
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import aiofiles

from ..interfaces import LogBackend, LogRecord, LogLevel, LogType
from ..structs import FileBackendConfig


class FileBackend(LogBackend):
    """
    File logging backend.

    Text and audit records are buffered; metrics are skipped. The buffer is
    written with aiofiles when ``flush()`` is awaited, or automatically once
    it holds ``buffer_size`` lines.
    """

    def __init__(self, config: FileBackendConfig, name: str = "file"):
        if not isinstance(config, FileBackendConfig):
            raise TypeError(f"Expected FileBackendConfig, got {type(config)}")

        super().__init__(name)

        self.config = config
        self.file_path = Path(config.path)
        self.format_type = config.format
        self.min_level = LogLevel[config.min_level.upper()]
        self.buffer_size = config.buffer_size
        self.enabled = config.enabled

        self._write_buffer: List[str] = []
        self._lock = threading.Lock()
        self._flush_lock = asyncio.Lock()
        self._flush_task: Optional[asyncio.Task] = None

        if self.enabled:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)

    def should_handle(self, record: LogRecord) -> bool:
        if not self.enabled:
            return False
        if record.log_type == LogType.METRIC:
            return False
        return record.level >= self.min_level

    def write_sync(self, record: LogRecord) -> None:
        if self.format_type == 'json':
            formatted = self._format_json(record)
        else:
            formatted = self._format_text(record)

        with self._lock:
            self._write_buffer.append(formatted)
            full = len(self._write_buffer) >= self.buffer_size

        if full:
            self._auto_flush()

    def pending(self) -> int:
        """Number of buffered lines not yet written."""
        with self._lock:
            return len(self._write_buffer)

    def _take_buffer(self) -> List[str]:
        with self._lock:
            lines, self._write_buffer = self._write_buffer, []
        return lines

    def _auto_flush(self) -> None:
        """Full buffer: schedule an async flush on the running loop, else write in place."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            lines = self._take_buffer()
            if lines:
                with open(self.file_path, 'a', encoding='utf-8') as f:
                    f.write('\n'.join(lines) + '\n')
            return

        if self._flush_task is None or self._flush_task.done():
            self._flush_task = loop.create_task(self.flush())
            self._flush_task.add_done_callback(self._flush_done)

    def _flush_done(self, task: asyncio.Task) -> None:
        if not task.cancelled() and task.exception() is not None:
            self._handle_error(task.exception())

    async def flush(self) -> None:
        """Append buffered lines to the log file."""
        async with self._flush_lock:
            lines = self._take_buffer()
            if not lines:
                return

            async with aiofiles.open(self.file_path, 'a', encoding='utf-8') as f:
                await f.write('\n'.join(lines) + '\n')

    def _format_text(self, record: LogRecord) -> str:
        """Format as readable text."""
        timestamp = datetime.fromtimestamp(record.timestamp).isoformat()
        message = f"[{timestamp}] {record.level.name} {record.logger_name}: {record.message}"

        if record.context:
            context_parts = [f"{k}={v}" for k, v in record.context.items()]
            message += f" | {', '.join(context_parts)}"

        correlation_parts = []
        if record.correlation_id:
            correlation_parts.append(f"correlation_id={record.correlation_id}")
        if record.exchange:
            correlation_parts.append(f"exchange={record.exchange}")

        if correlation_parts:
            message += f" | {', '.join(correlation_parts)}"

        return message

    def _format_json(self, record: LogRecord) -> str:
        """Format as JSON for structured logging."""
        data = {
            'timestamp': record.timestamp,
            'level': record.level.name,
            'type': record.log_type.name,
            'logger': record.logger_name,
            'message': record.message
        }

        if record.context:
            data['context'] = record.context
        if record.correlation_id:
            data['correlation_id'] = record.correlation_id
        if record.exchange:
            data['exchange'] = record.exchange

        return json.dumps(data, separators=(',', ':'), default=str)
