"""
streamjson - incremental parser for CLI stream-json output

Turns chunked JSONL from a CLI run into streamed text, tool calls,
session id, token usage and errors.
"""

__version__ = "0.1.0"

from ._streaming import CliStream
from ._types import CliUsage, StreamJsonCallbacks
from .exceptions import CliRunError, InputError, StreamJsonError
from .streaming import StreamJsonEventType, StreamJsonParser, create_stream_json_parser

__all__ = [
    "CliRunError",
    "CliStream",
    "CliUsage",
    "InputError",
    "StreamJsonCallbacks",
    "StreamJsonError",
    "StreamJsonEventType",
    "StreamJsonParser",
    "create_stream_json_parser",
]
