"""
Real-time JSONL parser for CLI ``--output-format stream-json`` output.

Each line from the CLI is a JSON object. The parser buffers incomplete lines
across ``feed`` calls, emits text deltas and tool names as they arrive, and
captures the session id, token usage and error status of the session.
"""

from enum import Enum
import json
import logging
from typing import Any

from ._types import CliUsage, StreamJsonCallbacks

logger = logging.getLogger(__name__)


class StreamJsonEventType(str, Enum):
    """stream-json event types the parser acts on."""

    CONTENT_BLOCK_DELTA = "content_block_delta"
    CONTENT_BLOCK_START = "content_block_start"
    SYSTEM = "system"
    RESULT = "result"


def is_record(value: Any) -> bool:
    """Return True for decoded JSON objects."""
    return isinstance(value, dict)


class StreamJsonParser:
    """
    Incremental parser for a stream-json session.

    Usage:
        parser = StreamJsonParser(StreamJsonCallbacks(on_text=print))
        for chunk in chunks:
            parser.feed(chunk)
        parser.flush()
        print(parser.get_session_id(), parser.get_usage())
    """

    def __init__(self, callbacks: StreamJsonCallbacks | None = None) -> None:
        self.callbacks = callbacks or StreamJsonCallbacks()
        self._buffer = ""
        self._text_parts: list[str] = []
        self._session_id: str | None = None
        self._usage: CliUsage | None = None

    def feed(self, chunk: str) -> None:
        """Append a raw fragment and process every line it completes."""
        self._buffer += chunk
        lines = self._buffer.split("\n")
        # Last piece may be an incomplete line
        self._buffer = lines.pop()
        for line in lines:
            self._process_line(line)

    def flush(self) -> None:
        """Process a trailing unterminated line. Call once at end-of-stream."""
        pending, self._buffer = self._buffer, ""
        if pending.strip():
            self._process_line(pending)

    def get_collected_text(self) -> str:
        """Get all streamed text so far."""
        return "".join(self._text_parts)

    def get_session_id(self) -> str | None:
        return self._session_id

    def get_usage(self) -> CliUsage | None:
        return self._usage

    def _process_line(self, line: str) -> None:
        trimmed = line.strip()
        if not trimmed:
            return

        try:
            data = json.loads(trimmed)
        except json.JSONDecodeError:
            logger.debug("Skipping malformed stream-json line: %s", trimmed[:200])
            return
        if not is_record(data):
            logger.debug("Skipping non-object stream-json line: %s", trimmed[:200])
            return

        event_type = data.get("type")
        if not isinstance(event_type, str):
            event_type = ""

        if event_type == StreamJsonEventType.CONTENT_BLOCK_DELTA and is_record(data.get("delta")):
            delta = data["delta"]
            if delta.get("type") == "text_delta" and isinstance(delta.get("text"), str):
                self._emit_text(delta["text"])
            return

        if event_type == StreamJsonEventType.CONTENT_BLOCK_START and is_record(
            data.get("content_block")
        ):
            block = data["content_block"]
            if block.get("type") == "tool_use" and isinstance(block.get("name"), str):
                if self.callbacks.on_tool_use:
                    self.callbacks.on_tool_use(block["name"])
            return

        # system init carries the session id; later system events are ignored
        if event_type == StreamJsonEventType.SYSTEM and self._session_id is None:
            self._capture_session_id(data)
            return

        if event_type == StreamJsonEventType.RESULT:
            self._handle_result(data)

    def _handle_result(self, data: dict[str, Any]) -> None:
        self._capture_session_id(data)

        if is_record(data.get("usage")):
            usage = CliUsage.from_dict(data["usage"])
            if usage is not None:
                self._usage = usage
                if self.callbacks.on_usage:
                    self.callbacks.on_usage(usage)

        result = data.get("result")
        # Fallback for runs that emitted no deltas
        if not self._text_parts and isinstance(result, str) and result.strip():
            self._emit_text(result)

        if data.get("is_error") is True and isinstance(result, str):
            if self.callbacks.on_error:
                self.callbacks.on_error(result)

    def _capture_session_id(self, data: dict[str, Any]) -> None:
        if self._session_id is not None:
            return
        session_id = data.get("session_id")
        if isinstance(session_id, str) and session_id.strip():
            self._session_id = session_id.strip()
            if self.callbacks.on_session_id:
                self.callbacks.on_session_id(self._session_id)

    def _emit_text(self, text: str) -> None:
        self._text_parts.append(text)
        if self.callbacks.on_text:
            self.callbacks.on_text(text)


def create_stream_json_parser(
    callbacks: StreamJsonCallbacks | None = None, **handlers: Any
) -> StreamJsonParser:
    """
    Create a parser from a callbacks object or keyword handlers.

    Args:
        callbacks: Observer slots; mutually exclusive with handlers
        **handlers: on_text, on_tool_use, on_session_id, on_usage, on_error

    Returns:
        New StreamJsonParser
    """
    if callbacks is not None and handlers:
        raise TypeError("Pass either callbacks or keyword handlers, not both")
    if handlers:
        callbacks = StreamJsonCallbacks(**handlers)
    return StreamJsonParser(callbacks)
