from __future__ import annotations

import pytest

from line_annotator.adapters.sinks import MemoryByteSink
from line_annotator.usecases.annotating_writer import LineAnnotatingWriter


def test_write_without_newline_is_buffered_until_close() -> None:
    # No line feed: nothing reaches the sink until close, yet all bytes are accepted.
    sink = MemoryByteSink()
    writer = LineAnnotatingWriter(sink)
    assert writer.write(b"hello") == 5
    assert sink.chunks == []
    assert writer.pending == b"hello"
    writer.close()
    assert sink.getvalue() == b"hello"


def test_prefix_applied_to_unterminated_tail_on_close() -> None:
    sink = MemoryByteSink()
    writer = LineAnnotatingWriter(sink).with_prefix("=>")
    assert writer.write(b"hello") == 5
    writer.close()
    assert sink.getvalue() == b"=>hello"


def test_prefix_single_line() -> None:
    sink = MemoryByteSink()
    writer = LineAnnotatingWriter(sink, prefix=b"=>")
    assert writer.write(b"hello\n") == 6
    writer.close()
    assert sink.getvalue() == b"=>hello\n"


def test_prefix_three_lines_in_one_write() -> None:
    # Each line gets its own prefix; the last, unterminated one gets it on close.
    sink = MemoryByteSink()
    writer = LineAnnotatingWriter(sink).with_prefix("=>")
    data = b"hello\nmagnificent\nworld"
    assert writer.write(data) == len(data)
    writer.close()
    assert sink.getvalue() == b"=>hello\n=>magnificent\n=>world"


def test_prefix_three_lines_across_two_writes() -> None:
    # Write boundaries inside a line are invisible in the output.
    sink = MemoryByteSink()
    writer = LineAnnotatingWriter(sink).with_prefix("=>")
    for data in (b"hello\nmagnif", b"icent\nworld"):
        assert writer.write(data) == len(data)
    writer.close()
    assert sink.getvalue() == b"=>hello\n=>magnificent\n=>world"


def test_suffix_goes_before_terminator() -> None:
    sink = MemoryByteSink()
    writer = LineAnnotatingWriter(sink).with_suffix("<=")
    data = b"hello\n"
    assert writer.write(data) == len(data)
    writer.close()
    assert sink.getvalue() == b"hello<=\n"


def test_suffix_is_not_applied_on_close() -> None:
    # The flushed tail has no terminator, so there is nothing for the suffix to precede.
    sink = MemoryByteSink()
    writer = LineAnnotatingWriter(sink, prefix="[", suffix="]")
    writer.write(b"a\nb")
    writer.close()
    assert sink.getvalue() == b"[a]\n[b"


def test_sink_receives_separate_segments_per_step() -> None:
    # prefix, pending buffer, body, suffix, terminator are distinct sink writes.
    sink = MemoryByteSink()
    writer = LineAnnotatingWriter(sink, prefix="P", suffix="S")
    writer.write(b"he")
    writer.write(b"llo\n")
    assert sink.chunks == [b"P", b"he", b"llo", b"S", b"\n"]


def test_empty_prefix_and_suffix_issue_no_writes() -> None:
    sink = MemoryByteSink()
    writer = LineAnnotatingWriter(sink, prefix="", suffix=None)
    writer.write(b"hello\n")
    assert sink.chunks == [b"hello", b"\n"]


def test_empty_line_writes_only_annotation_and_terminator() -> None:
    sink = MemoryByteSink()
    writer = LineAnnotatingWriter(sink, prefix="=>")
    assert writer.write(b"\n\n") == 2
    assert sink.chunks == [b"=>", b"\n", b"=>", b"\n"]


def test_crlf_terminator_keeps_cr_out_of_body() -> None:
    # CR before LF belongs to the terminator, so the suffix lands before "\r\n".
    sink = MemoryByteSink()
    writer = LineAnnotatingWriter(sink, suffix="<=")
    assert writer.write(b"hello\r\nworld\r\n") == 14
    assert sink.chunks == [b"hello", b"<=", b"\r\n", b"world", b"<=", b"\r\n"]


def test_crlf_split_across_writes_matches_single_write() -> None:
    # A CR ending one write and the LF starting the next still form one terminator.
    single = MemoryByteSink()
    LineAnnotatingWriter(single, suffix="<=").write(b"hello\r\n")

    split = MemoryByteSink()
    writer = LineAnnotatingWriter(split, suffix="<=")
    assert writer.write(b"hello\r") == 6
    assert writer.write(b"\n") == 1
    assert split.getvalue() == single.getvalue() == b"hello<=\r\n"


def test_lone_carriage_return_is_not_a_terminator() -> None:
    sink = MemoryByteSink()
    writer = LineAnnotatingWriter(sink, prefix="=>")
    writer.write(b"progress 10%\rprogress 20%\r")
    assert sink.chunks == []
    writer.close()
    assert sink.getvalue() == b"=>progress 10%\rprogress 20%\r"


def test_cr_in_middle_of_line_stays_in_body() -> None:
    sink = MemoryByteSink()
    writer = LineAnnotatingWriter(sink, suffix="<")
    writer.write(b"a\rb\n")
    assert sink.getvalue() == b"a\rb<\n"


def test_close_with_nothing_pending_is_a_no_op() -> None:
    sink = MemoryByteSink()
    writer = LineAnnotatingWriter(sink, prefix="=>")
    writer.write(b"done\n")
    sink.chunks.clear()
    writer.close()
    assert sink.chunks == []
    assert writer.closed


def test_close_twice_flushes_once() -> None:
    sink = MemoryByteSink()
    writer = LineAnnotatingWriter(sink, prefix="=>")
    writer.write(b"tail")
    writer.close()
    writer.close()
    assert sink.getvalue() == b"=>tail"


def test_write_after_close_raises() -> None:
    writer = LineAnnotatingWriter(MemoryByteSink())
    writer.close()
    with pytest.raises(ValueError):
        writer.write(b"late\n")


def test_write_rejects_text() -> None:
    writer = LineAnnotatingWriter(MemoryByteSink())
    with pytest.raises(TypeError):
        writer.write("hello\n")  # type: ignore[arg-type]


def test_write_accepts_bytearray_and_memoryview() -> None:
    sink = MemoryByteSink()
    writer = LineAnnotatingWriter(sink, prefix="#")
    assert writer.write(bytearray(b"a\n")) == 2
    assert writer.write(memoryview(b"b\n")) == 2
    assert sink.getvalue() == b"#a\n#b\n"


def test_empty_write_accepts_nothing() -> None:
    sink = MemoryByteSink()
    writer = LineAnnotatingWriter(sink, prefix="=>")
    assert writer.write(b"") == 0
    assert sink.chunks == []


def test_text_annotations_use_configured_encoding() -> None:
    writer = LineAnnotatingWriter(MemoryByteSink(), prefix="é", encoding="latin-1")
    assert writer.prefix == b"\xe9"
    writer.with_suffix("«")
    assert writer.suffix == b"\xab"


def test_bytes_annotations_are_used_verbatim() -> None:
    writer = LineAnnotatingWriter(MemoryByteSink()).with_prefix(b"\x1b[32m").with_suffix(b"\x1b[0m")
    assert writer.prefix == b"\x1b[32m"
    assert writer.suffix == b"\x1b[0m"


def test_context_manager_flushes_on_exit() -> None:
    sink = MemoryByteSink()
    with LineAnnotatingWriter(sink, prefix="> ") as writer:
        writer.write(b"one\ntwo")
    assert writer.closed
    assert sink.getvalue() == b"> one\n> two"


def test_lines_written_counts_terminated_lines() -> None:
    writer = LineAnnotatingWriter(MemoryByteSink())
    writer.write(b"a\nb\nc")
    assert writer.lines_written == 2
    writer.close()
    assert writer.lines_written == 2


class _CountingSink:
    # Counts bytes and calls without keeping them.
    def __init__(self) -> None:
        self.calls = 0
        self.size = 0

    def write(self, data: bytes) -> int:
        self.calls += 1
        self.size += len(data)
        return len(data)


def test_many_lines_in_one_write() -> None:
    # 10^5 lines in a single call: every line is annotated and fully accounted for.
    sink = _CountingSink()
    writer = LineAnnotatingWriter(sink, prefix=">", suffix="<")
    data = b"x\r\n" * 50_000 + b"yy\n" * 50_000 + b"tail"
    assert writer.write(data) == len(data)
    assert writer.lines_written == 100_000
    assert writer.pending == b"tail"
    # prefix, body, suffix, terminator per line.
    assert sink.calls == 4 * 100_000
    assert sink.size == len(data) - len(b"tail") + 2 * 100_000
