from __future__ import annotations

import sys
from pathlib import Path
from typing import BinaryIO

from line_annotator.adapters.sinks import FileByteSink, StreamByteSink
from line_annotator.config.models import OutputConfig
from line_annotator.ports.byte_sink import ByteSink


def build_sink(
    config: OutputConfig,
    *,
    stdout: BinaryIO | None = None,
    stderr: BinaryIO | None = None,
) -> ByteSink:
    # Factory mapping output config to a concrete ByteSink; std streams are injectable for tests.
    if config.kind == "file":
        assert config.path is not None
        return FileByteSink(Path(config.path), atomic_replace=config.atomic_replace)
    if config.kind == "stderr":
        return StreamByteSink(stderr if stderr is not None else sys.stderr.buffer)
    return StreamByteSink(stdout if stdout is not None else sys.stdout.buffer)
