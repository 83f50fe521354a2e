from .logging import (
    JsonlLogSink,
    LogMessage,
    NullLogSink,
    StderrLogSink,
    StructuredLogger,
    build_logger,
)

__all__ = [
    "JsonlLogSink",
    "LogMessage",
    "NullLogSink",
    "StderrLogSink",
    "StructuredLogger",
    "build_logger",
]
