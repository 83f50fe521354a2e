from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class WriteStep:
    # Label of one verified write inside a line; used to build error messages.
    name: str
    action: str
    gerund: str
    subject: str


PREFIX = WriteStep(name="prefix", action="write prefix", gerund="writing prefix", subject="prefix")
BUFFER_FLUSH = WriteStep(name="buffer_flush", action="flush buffer", gerund="flushing buffer", subject="buffer")
DATA = WriteStep(name="data", action="write data", gerund="writing data", subject="data")
NEW_LINE = WriteStep(name="new_line", action="write new line", gerund="writing new line", subject="new line")
SUFFIX = WriteStep(name="suffix", action="write suffix", gerund="writing suffix", subject="suffix")
BUFFER_APPEND = WriteStep(
    name="buffer_append", action="write to buffer", gerund="writing to buffer", subject="data"
)


class LineWriterError(RuntimeError):
    """Base error for a failed write step.

    ``written`` holds the bytes the enclosing ``write`` call accounted for
    before the failing step; it stays 0 for failures raised by ``close``.
    """

    def __init__(self, message: str, *, step: WriteStep) -> None:
        super().__init__(message)
        self.step = step
        self.written = 0


class SinkWriteError(LineWriterError):
    # The sink itself raised while accepting a segment.
    def __init__(self, step: WriteStep, cause: BaseException) -> None:
        super().__init__(f"failed to {step.action}: {cause}", step=step)
        self.cause = cause


class ShortWriteError(LineWriterError):
    # The sink reported success but accepted fewer (or more) bytes than requested.
    def __init__(self, step: WriteStep, *, expected: int, actual: int) -> None:
        super().__init__(
            f"inconsistency when {step.gerund}: {step.subject} len = {expected}, actually written = {actual}",
            step=step,
        )
        self.expected = expected
        self.actual = actual
