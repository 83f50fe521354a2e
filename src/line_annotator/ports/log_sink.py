from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from line_annotator.observability.logging import LogMessage


# LogSink port: destination for structured diagnostics emitted by the CLI.
@runtime_checkable
class LogSink(Protocol):
    def emit(self, message: "LogMessage") -> None:
        """Persist or print a single structured log record."""
        # Port contract has no implementation; calling it directly is a wiring error.
        raise NotImplementedError("LogSink is a port; use a concrete adapter.")

    def close(self) -> None:
        """Release resources held by the sink."""
        # Port contract has no implementation; calling it directly is a wiring error.
        raise NotImplementedError("LogSink is a port; use a concrete adapter.")
