from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

from line_annotator.ports.byte_sink import ByteSink


@dataclass
class StreamByteSink(ByteSink):
    # Delegates to an already-open binary stream (sys.stdout.buffer, a pipe, a socket file).
    stream: BinaryIO
    auto_flush: bool = True

    def write(self, data: bytes) -> int:
        accepted = self.stream.write(data)
        if self.auto_flush:
            self.stream.flush()
        # Raw non-blocking streams return None when nothing was taken.
        return 0 if accepted is None else accepted


@dataclass
class FileByteSink(ByteSink):
    # Annotated output to a file. With atomic_replace the target only changes on commit().
    path: Path
    atomic_replace: bool = False
    _handle: BinaryIO | None = field(default=None, init=False, repr=False)
    _staging: Path | None = field(default=None, init=False, repr=False)

    def write(self, data: bytes) -> int:
        if self._handle is None:
            self._handle = self._open_target()
        return self._handle.write(data)

    def commit(self) -> None:
        # Publish what was written; a staged file replaces the target. Repeated calls do nothing.
        if not self._release():
            return
        if self._staging is not None:
            self._staging.replace(self.path)
            self._staging = None

    def abort(self) -> None:
        # Drop a staged file so a failed run leaves the previous target untouched.
        # Without atomic_replace the partial target is left as written.
        self._release()
        if self._staging is not None:
            self._staging.unlink(missing_ok=True)
            self._staging = None

    def close(self) -> None:
        self.commit()

    def _release(self) -> bool:
        if self._handle is None:
            return False
        handle, self._handle = self._handle, None
        handle.flush()
        handle.close()
        return True

    def _open_target(self) -> BinaryIO:
        if not self.atomic_replace:
            return self.path.open("wb")
        staging = self.path.with_name(self.path.name + ".tmp")
        handle = staging.open("wb")
        self._staging = staging
        return handle


@dataclass
class MemoryByteSink(ByteSink):
    # In-memory sink; keeps every write call separately for inspection.
    chunks: list[bytes] = field(default_factory=list)

    def write(self, data: bytes) -> int:
        self.chunks.append(bytes(data))
        return len(data)

    def getvalue(self) -> bytes:
        return b"".join(self.chunks)
