"""
Main CLI entry point for streamjson.

Renders a recorded or piped ``--output-format stream-json`` session.
"""

import argparse
from collections.abc import Iterator
import logging
import os
import sys
from typing import IO, Any

from streamjson import __version__

from .._streaming import DEFAULT_CHUNK_SIZE, CliStream
from ..exceptions import InputError, StreamJsonError
from .display import DISPLAY_FORMATS, create_display
from .util import graceful_main

EXIT_UPSTREAM_ERROR = 1
EXIT_INPUT_ERROR = 2


def _env_chunk_size() -> int:
    raw = os.getenv("STREAMJSON_CHUNK_SIZE")
    if not raw:
        return DEFAULT_CHUNK_SIZE
    try:
        value = int(raw)
    except ValueError:
        return DEFAULT_CHUNK_SIZE
    return value if value > 0 else DEFAULT_CHUNK_SIZE


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="streamjson",
        description="Render a CLI stream-json session (JSONL) as it streams",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="stream-json log file to read ('-' or omitted for stdin)",
    )
    parser.add_argument(
        "--format",
        choices=DISPLAY_FORMATS,
        default=os.getenv("STREAMJSON_FORMAT", "verbose"),
        help="Output format (or set STREAMJSON_FORMAT environment variable)",
    )
    parser.add_argument(
        "--chunk-size",
        type=_positive_int,
        default=_env_chunk_size(),
        help="Bytes read per chunk (or set STREAMJSON_CHUNK_SIZE environment variable)",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("STREAMJSON_LOG_LEVEL", "WARNING"),
        help="Logging level (or set STREAMJSON_LOG_LEVEL environment variable)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when the session reported an error",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _stdin_chunks(chunk_size: int) -> Iterator[bytes]:
    # Generator so that closing the stream leaves sys.stdin open
    while chunk := sys.stdin.buffer.read(chunk_size):
        yield chunk


def _open_input(path: str, chunk_size: int) -> IO[Any] | Iterator[bytes]:
    if path == "-":
        return _stdin_chunks(chunk_size)
    try:
        return open(path, "rb")
    except FileNotFoundError:
        raise InputError.not_found(path) from None
    except OSError as e:
        raise InputError.unreadable(path, e.strerror or str(e)) from e


def _real_main(argv: list[str]) -> int:
    """Real main CLI logic that handles argument parsing and rendering."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.getLevelName(str(args.log_level).upper())
    if not isinstance(level, int):
        print(f"❌ Unknown log level: {args.log_level}", file=sys.stderr)
        return EXIT_INPUT_ERROR
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    # STREAMJSON_FORMAT bypasses argparse choices
    if args.format not in DISPLAY_FORMATS:
        print(f"❌ Unknown format: {args.format}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    display = create_display(args.format)
    try:
        source = _open_input(args.input, args.chunk_size)
        display.start()
        with CliStream(source, display.callbacks(), chunk_size=args.chunk_size) as stream:
            stream.consume()
        display.finish(stream)
        if args.strict:
            stream.raise_for_error()
    except InputError as e:
        print(f"❌ {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR
    except StreamJsonError as e:
        print(f"❌ {e}", file=sys.stderr)
        return EXIT_UPSTREAM_ERROR
    return 0


def main() -> None:
    """Main CLI entry point with graceful interrupt handling."""
    code = graceful_main(_real_main, sys.argv[1:])
    raise SystemExit(code)


if __name__ == "__main__":
    main()
