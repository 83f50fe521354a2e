from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import TextIO

from line_annotator.config.models import LoggingConfig
from line_annotator.ports.log_sink import LogSink

_LEVELS = {"debug": 10, "info": 20, "warning": 30, "error": 40}


@dataclass(frozen=True, slots=True)
class LogMessage:
    # One diagnostic event of an annotation run (start, finish, failed write step).
    level: str
    message: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
    fields: dict[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.level not in _LEVELS:
            raise ValueError(f"Unknown log level: {self.level!r}")
        if not self.message:
            raise ValueError("LogMessage.message must not be empty")

    def to_json(self) -> str:
        # Compact JSON object, UTC timestamp with millisecond precision.
        stamp = self.timestamp.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"
        record = {"level": self.level, "message": self.message, "timestamp": stamp, "fields": self.fields}
        return json.dumps(record, separators=(",", ":"), ensure_ascii=False, default=str)


class StderrLogSink(LogSink):
    # Default sink: stdout carries annotated data, so diagnostics go to stderr.
    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def emit(self, message: LogMessage) -> None:
        stream = self._stream if self._stream is not None else sys.stderr
        print(message.to_json(), file=stream)

    def close(self) -> None:
        pass


class JsonlLogSink(LogSink):
    # Appends run diagnostics to a JSONL file; the file is created on the first record.
    def __init__(self, path: Path) -> None:
        self._path = path
        self._file: TextIO | None = None

    def emit(self, message: LogMessage) -> None:
        if self._file is None:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._file = self._path.open("a", encoding="utf-8")
        self._file.write(message.to_json() + "\n")
        self._file.flush()

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None


class NullLogSink(LogSink):
    def emit(self, message: LogMessage) -> None:
        pass

    def close(self) -> None:
        pass


@dataclass
class StructuredLogger:
    # Level filter in front of a LogSink.
    sink: LogSink
    level: str = "warning"

    def __post_init__(self) -> None:
        if self.level not in _LEVELS:
            raise ValueError(f"Unknown log level: {self.level}")

    def log(self, level: str, message: str, **fields: object) -> None:
        if _LEVELS[level] < _LEVELS[self.level]:
            return
        self.sink.emit(LogMessage(level=level, message=message, fields=dict(fields)))

    def debug(self, message: str, **fields: object) -> None:
        self.log("debug", message, **fields)

    def info(self, message: str, **fields: object) -> None:
        self.log("info", message, **fields)

    def warning(self, message: str, **fields: object) -> None:
        self.log("warning", message, **fields)

    def error(self, message: str, **fields: object) -> None:
        self.log("error", message, **fields)

    def close(self) -> None:
        self.sink.close()


def build_logger(config: LoggingConfig, *, stream: TextIO | None = None) -> StructuredLogger:
    # Map logging config to a sink; `stream` replaces stderr in tests.
    sink: LogSink
    if config.sink == "jsonl":
        assert config.path is not None
        sink = JsonlLogSink(Path(config.path))
    elif config.sink == "none":
        sink = NullLogSink()
    else:
        sink = StderrLogSink(stream)
    return StructuredLogger(sink=sink, level=config.level)

