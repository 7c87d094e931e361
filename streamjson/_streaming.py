"""CliStream context manager driving a StreamJsonParser from a chunk source."""

from __future__ import annotations

import codecs
from collections.abc import Iterable, Iterator
from typing import IO, Any

from ._types import CliUsage, StreamJsonCallbacks
from .exceptions import CliRunError
from .streaming import StreamJsonParser

DEFAULT_CHUNK_SIZE = 4096


class CliStream:
    """Feeds CLI output into a parser. Use as context manager or iterate directly.

    The source is either an iterable of ``str``/``bytes`` chunks or a file
    object with ``read``. Bytes are decoded as UTF-8 incrementally, so a
    character split across two chunks is reassembled.

    Usage:
        with CliStream(proc.stdout, StreamJsonCallbacks(on_text=print)) as stream:
            stream.consume()
        stream.raise_for_error()
        print(stream.session_id, stream.usage)
    """

    def __init__(
        self,
        source: Iterable[str | bytes] | IO[Any],
        callbacks: StreamJsonCallbacks | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._source = source
        self._chunk_size = chunk_size
        self._user_callbacks = callbacks or StreamJsonCallbacks()
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._parser = StreamJsonParser(
            StreamJsonCallbacks(
                on_text=self._user_callbacks.on_text,
                on_tool_use=self._record_tool_use,
                on_session_id=self._user_callbacks.on_session_id,
                on_usage=self._user_callbacks.on_usage,
                on_error=self._record_error,
            )
        )
        self.errors: list[str] = []
        self.tools_used: list[str] = []
        self._finished = False
        self._closed = False

    def _record_tool_use(self, name: str) -> None:
        self.tools_used.append(name)
        if self._user_callbacks.on_tool_use:
            self._user_callbacks.on_tool_use(name)

    def _record_error(self, message: str) -> None:
        self.errors.append(message)
        if self._user_callbacks.on_error:
            self._user_callbacks.on_error(message)

    def _chunks(self) -> Iterator[str | bytes]:
        read = getattr(self._source, "read", None)
        if callable(read):
            while True:
                chunk = read(self._chunk_size)
                if not chunk:
                    return
                yield chunk
        else:
            yield from self._source  # type: ignore[misc]

    def _decode(self, chunk: str | bytes) -> str:
        if isinstance(chunk, bytes):
            return self._decoder.decode(chunk)
        return chunk

    def _finish(self) -> None:
        """Feed any buffered bytes and flush the parser (idempotent)."""
        if self._finished:
            return
        self._finished = True
        tail = self._decoder.decode(b"", final=True)
        if tail:
            self._parser.feed(tail)
        self._parser.flush()

    def close(self) -> None:
        """Flush the parser and close the underlying source (idempotent)."""
        self._finish()
        if not self._closed:
            self._closed = True
            close = getattr(self._source, "close", None)
            if callable(close):
                close()

    def __iter__(self) -> Iterator[str]:
        # Flushed already; replaying a re-iterable source would duplicate events
        if self._finished:
            return
        try:
            for chunk in self._chunks():
                text = self._decode(chunk)
                self._parser.feed(text)
                yield text
        finally:
            self.close()

    def consume(self) -> CliStream:
        """Drive the stream to completion and return self."""
        for _ in self:
            pass
        return self

    def __enter__(self) -> CliStream:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    @property
    def parser(self) -> StreamJsonParser:
        return self._parser

    @property
    def text(self) -> str:
        """Full accumulated assistant text."""
        return self._parser.get_collected_text()

    @property
    def session_id(self) -> str | None:
        return self._parser.get_session_id()

    @property
    def usage(self) -> CliUsage | None:
        return self._parser.get_usage()

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def raise_for_error(self) -> None:
        """Raise CliRunError if the CLI reported a failed run."""
        if self.has_errors():
            raise CliRunError(self.errors[-1], session_id=self.session_id)
