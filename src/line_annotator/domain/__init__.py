from .errors import (
    BUFFER_APPEND,
    BUFFER_FLUSH,
    DATA,
    NEW_LINE,
    PREFIX,
    SUFFIX,
    LineWriterError,
    ShortWriteError,
    SinkWriteError,
    WriteStep,
)
from .scanning import CARRIAGE_RETURN, LINE_FEED, scan_line

# Domain exports: write-step labels, error types and the line scanner.
__all__ = [
    "BUFFER_APPEND",
    "BUFFER_FLUSH",
    "CARRIAGE_RETURN",
    "DATA",
    "LINE_FEED",
    "NEW_LINE",
    "PREFIX",
    "SUFFIX",
    "LineWriterError",
    "ShortWriteError",
    "SinkWriteError",
    "WriteStep",
    "scan_line",
]
