from __future__ import annotations

from typing import Protocol, runtime_checkable


# ByteSink port: where annotated bytes leave the writer.
@runtime_checkable
class ByteSink(Protocol):
    def write(self, data: bytes) -> int:
        """Accept bytes and return how many were actually taken."""
        # Port contract has no implementation; calling it directly is a wiring error.
        raise NotImplementedError("ByteSink is a port; use a concrete adapter.")
