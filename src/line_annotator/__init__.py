from .adapters import FileByteSink, MemoryByteSink, StreamByteSink
from .domain.errors import LineWriterError, ShortWriteError, SinkWriteError
from .ports import ByteSink
from .usecases import LineAnnotatingWriter, pump

__all__ = [
    "ByteSink",
    "FileByteSink",
    "LineAnnotatingWriter",
    "LineWriterError",
    "MemoryByteSink",
    "ShortWriteError",
    "SinkWriteError",
    "StreamByteSink",
    "pump",
]
