from .factory import build_sink
from .sinks import FileByteSink, MemoryByteSink, StreamByteSink

# Public adapter exports are optional but make wiring simpler.
__all__ = ["FileByteSink", "MemoryByteSink", "StreamByteSink", "build_sink"]
