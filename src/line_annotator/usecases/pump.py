from __future__ import annotations

from typing import BinaryIO

from line_annotator.usecases.annotating_writer import LineAnnotatingWriter


def pump(reader: BinaryIO, writer: LineAnnotatingWriter, chunk_size: int = 65536) -> int:
    # Copy a binary stream into the writer chunk by chunk; returns total bytes accepted.
    # read1 returns whatever is available so interactive output is annotated promptly.
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    read = getattr(reader, "read1", None) or reader.read
    total = 0
    while True:
        chunk = read(chunk_size)
        if not chunk:
            return total
        total += writer.write(chunk)
