from __future__ import annotations

LINE_FEED = b"\n"
CARRIAGE_RETURN = b"\r"
_CR = ord(CARRIAGE_RETURN)


def scan_line(data: bytes, start: int = 0) -> tuple[int, int]:
    # Locate the next complete line at or after `start`: (end, body_end), both absolute indices.
    # end is the index just past the LF; data[body_end:end] is the terminator ("\n" or "\r\n").
    # end == 0 means no LF yet; the caller keeps data[start:] as a partial line.
    index = data.find(LINE_FEED, start)
    if index < 0:
        return 0, start
    body_end = index - 1 if index > start and data[index - 1] == _CR else index
    return index + 1, body_end
