from __future__ import annotations

import argparse
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import BinaryIO, TextIO

from line_annotator.adapters.factory import build_sink
from line_annotator.adapters.sinks import FileByteSink
from line_annotator.config.loader import ConfigError, load_config, parse_config
from line_annotator.config.models import AppConfig
from line_annotator.domain.errors import LineWriterError
from line_annotator.observability.logging import StructuredLogger, build_logger
from line_annotator.usecases.annotating_writer import LineAnnotatingWriter
from line_annotator.usecases.pump import pump

EXIT_OK = 0
EXIT_WRITE_FAILED = 1
EXIT_CONFIG_ERROR = 2
EXIT_INPUT_FAILED = 3
EXIT_COMMAND_NOT_FOUND = 127


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="line-annotator",
        description="Prefix/suffix every line of a byte stream or of a command's output.",
    )
    parser.add_argument("--config", help="Path to YAML config")
    parser.add_argument("--prefix", help="Text inserted before each line")
    parser.add_argument("--suffix", help="Text inserted before each line terminator")
    parser.add_argument("--input", help="Read from this file instead of stdin")
    parser.add_argument("--output", help="Write to this file instead of stdout")
    parser.add_argument("--chunk-size", type=int, help="Read size in bytes")
    parser.add_argument("--log-level", choices=["debug", "info", "warning", "error"])
    parser.add_argument("--log-path", help="Write JSONL diagnostics to this file")
    parser.add_argument("command", nargs=argparse.REMAINDER, help="Command whose output is annotated")
    return parser


def parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    # Parse CLI arguments; caller passes argv for testability.
    args = build_parser().parse_args(argv)
    if args.command and args.command[0] == "--":
        args.command = args.command[1:]
    return args


def resolve_config(args: argparse.Namespace) -> AppConfig:
    # Config file first, CLI flags on top; the merged result is validated again.
    config = load_config(Path(args.config)) if args.config else AppConfig()
    raw = config.model_dump()
    if args.prefix is not None:
        raw["annotation"]["prefix"] = args.prefix
    if args.suffix is not None:
        raw["annotation"]["suffix"] = args.suffix
    if args.input is not None:
        raw["input"]["path"] = args.input
    if args.chunk_size is not None:
        raw["input"]["chunk_size"] = args.chunk_size
    if args.output is not None:
        # Keep the rest of the output section (atomic_replace) from the file.
        raw["output"].update(kind="file", path=args.output)
    if args.log_level is not None:
        raw["logging"]["level"] = args.log_level
    if args.log_path is not None:
        raw["logging"].update(sink="jsonl", path=args.log_path)
    return parse_config(raw)


def run(
    argv: Sequence[str] | None = None,
    *,
    stdin: BinaryIO | None = None,
    stdout: BinaryIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    # Streams are injectable so tests can run the whole flow in memory.
    args = parse_args(argv)
    try:
        config = resolve_config(args)
    except ConfigError as exc:
        print(f"line-annotator: {exc}", file=stderr if stderr is not None else sys.stderr)
        return EXIT_CONFIG_ERROR

    logger = build_logger(config.logging, stream=stderr)
    sink = build_sink(config.output, stdout=stdout)
    writer = LineAnnotatingWriter(
        sink,
        prefix=config.annotation.prefix,
        suffix=config.annotation.suffix,
        encoding=config.annotation.encoding,
    )
    committed = False
    try:
        try:
            if args.command:
                code = _run_command(args.command, writer, config, logger)
            else:
                code = _run_stream(stdin, writer, config, logger)
        except LineWriterError as exc:
            logger.error("annotated write failed", step=exc.step.name, written=exc.written, error=str(exc))
            return EXIT_WRITE_FAILED
        except OSError as exc:
            logger.error("reading input failed", error=str(exc))
            return EXIT_INPUT_FAILED
        if isinstance(sink, FileByteSink):
            sink.commit()
        committed = True
        return code
    finally:
        # Output of a failed run never replaces the previous target.
        if not committed and isinstance(sink, FileByteSink):
            sink.abort()
        logger.close()


def _run_stream(
    stdin: BinaryIO | None,
    writer: LineAnnotatingWriter,
    config: AppConfig,
    logger: StructuredLogger,
) -> int:
    source = config.input.path or "<stdin>"
    logger.info("annotating stream", source=source)
    if config.input.path is not None:
        with Path(config.input.path).open("rb") as reader:
            total = pump(reader, writer, config.input.chunk_size)
    else:
        total = pump(stdin if stdin is not None else sys.stdin.buffer, writer, config.input.chunk_size)
    writer.close()
    logger.info("stream annotated", source=source, bytes=total, lines=writer.lines_written)
    return EXIT_OK


def _run_command(
    command: list[str],
    writer: LineAnnotatingWriter,
    config: AppConfig,
    logger: StructuredLogger,
) -> int:
    # stderr is merged into stdout so a single writer sees one ordered stream.
    logger.info("starting command", command=command)
    try:
        proc = subprocess.Popen(command, stdout=subprocess.PIPE, stderr=subprocess.STDOUT)
    except FileNotFoundError as exc:
        logger.error("command not found", command=command, error=str(exc))
        return EXIT_COMMAND_NOT_FOUND
    with proc:
        assert proc.stdout is not None
        try:
            total = pump(proc.stdout, writer, config.input.chunk_size)
            writer.close()
        except LineWriterError:
            proc.kill()
            raise
    logger.info(
        "command finished",
        command=command,
        returncode=proc.returncode,
        bytes=total,
        lines=writer.lines_written,
    )
    return proc.returncode
