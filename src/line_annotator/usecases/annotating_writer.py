from __future__ import annotations

import io
from types import TracebackType
from typing import Protocol

from line_annotator.domain.errors import (
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
from line_annotator.domain.scanning import CARRIAGE_RETURN, scan_line
from line_annotator.ports.byte_sink import ByteSink


class _Target(Protocol):
    def write(self, data: bytes) -> int | None: ...


class LineAnnotatingWriter:
    """Decorates a byte sink so that every complete line gets a prefix and a suffix.

    Lines may arrive split across any number of ``write`` calls; the bytes
    after the last line feed are held in a pending buffer until the next
    line feed or ``close``. The prefix goes before the line body, the suffix
    goes before the terminator (``\\n`` or ``\\r\\n``).

    ``write`` returns the number of input bytes accepted. When a sink write
    fails or comes up short, a ``LineWriterError`` is raised whose ``written``
    attribute holds the bytes accounted for before the failing step. Bytes
    already handed to the sink stay there, so retrying the whole call is not
    safe.

    Not thread-safe: one producer owns one writer.
    """

    def __init__(
        self,
        sink: ByteSink,
        *,
        prefix: bytes | str | None = None,
        suffix: bytes | str | None = None,
        encoding: str = "utf-8",
    ) -> None:
        self._sink = sink
        self._encoding = encoding
        self._pending = io.BytesIO()
        self._prefix = self._coerce(prefix)
        self._suffix = self._coerce(suffix)
        self._lines_written = 0
        self._closed = False

    def with_prefix(self, prefix: bytes | str | None) -> LineAnnotatingWriter:
        # Configuration-time setter; changing it after writes began is not supported.
        self._prefix = self._coerce(prefix)
        return self

    def with_suffix(self, suffix: bytes | str | None) -> LineAnnotatingWriter:
        self._suffix = self._coerce(suffix)
        return self

    @property
    def prefix(self) -> bytes:
        return self._prefix

    @property
    def suffix(self) -> bytes:
        return self._suffix

    @property
    def pending(self) -> bytes:
        # Bytes of the current incomplete line (never contains a line feed).
        return self._pending.getvalue()

    @property
    def lines_written(self) -> int:
        return self._lines_written

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, data: bytes | bytearray | memoryview) -> int:
        if self._closed:
            raise ValueError("write to closed LineAnnotatingWriter")
        if isinstance(data, str):
            raise TypeError("write() argument must be a bytes-like object, not str")
        data = bytes(data)
        position = 0
        written = 0
        try:
            while True:
                end, body_end = scan_line(data, position)
                if end == 0:
                    break
                body = data[position:body_end]
                terminator = data[body_end:end]
                self._write_optional(self._prefix, PREFIX)
                if body_end == position and end - position == 1:
                    # A CR left at the end of the previous write belongs to this terminator.
                    terminator = self._flush_pending(keep_trailing_cr=True) + terminator
                else:
                    self._flush_pending()
                self._write_exact(self._sink, body, DATA)
                written += len(body)
                self._write_optional(self._suffix, SUFFIX)
                self._write_exact(self._sink, terminator, NEW_LINE)
                written += end - body_end
                self._lines_written += 1
                position = end
            if position < len(data):
                # No more line feeds: keep the tail until the next write or close.
                tail = data[position:]
                self._write_exact(self._pending, tail, BUFFER_APPEND)
                written += len(tail)
        except LineWriterError as exc:
            exc.written = written
            raise
        return written

    def close(self) -> None:
        # Flush the pending tail as a final unterminated line: prefix, no suffix, no terminator.
        if self._closed:
            return
        if self._pending.tell() > 0:
            self._write_optional(self._prefix, PREFIX)
            self._flush_pending()
        self._closed = True

    def __enter__(self) -> LineAnnotatingWriter:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _flush_pending(self, *, keep_trailing_cr: bool = False) -> bytes:
        # Write the pending buffer to the sink and reset it; returns a held-back trailing CR, if any.
        pending = self._pending.getvalue()
        carried = b""
        if keep_trailing_cr and pending.endswith(CARRIAGE_RETURN):
            pending, carried = pending[:-1], CARRIAGE_RETURN
        self._write_exact(self._sink, pending, BUFFER_FLUSH)
        self._pending.seek(0)
        self._pending.truncate()
        return carried

    def _write_optional(self, segment: bytes, step: WriteStep) -> None:
        if segment:
            self._write_exact(self._sink, segment, step)

    def _write_exact(self, target: _Target, segment: bytes, step: WriteStep) -> None:
        # Write exactly len(segment) bytes or fail; empty segments never reach the target.
        if not segment:
            return
        try:
            accepted = target.write(segment)
        except Exception as exc:
            raise SinkWriteError(step, exc) from exc
        if accepted is None:
            # Non-blocking raw streams return None when nothing could be written.
            accepted = 0
        if accepted != len(segment):
            raise ShortWriteError(step, expected=len(segment), actual=accepted)

    def _coerce(self, value: bytes | str | None) -> bytes:
        if value is None:
            return b""
        if isinstance(value, str):
            return value.encode(self._encoding)
        return bytes(value)
