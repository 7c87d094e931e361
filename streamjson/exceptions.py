"""
Exception classes for streamjson.

The parser itself never raises for stream content; these cover the
caller-facing surfaces built on top of it.
"""


class StreamJsonError(Exception):
    """Base exception for all streamjson errors."""

    def __init__(self, message: str, code: str | None = None, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class CliRunError(StreamJsonError):
    """Raised on request when the CLI reported a failed run (``is_error``)."""

    def __init__(self, message: str, session_id: str | None = None, **kwargs) -> None:
        kwargs.setdefault("code", "cli_run_failed")
        super().__init__(message, **kwargs)
        self.session_id = session_id


class InputError(StreamJsonError):
    """Raised when the stream source cannot be opened or read."""

    @classmethod
    def not_found(cls, path: str) -> "InputError":
        """Create error for a missing input file."""
        return cls(f"Input file not found: {path}", code="input_not_found", details={"path": path})

    @classmethod
    def unreadable(cls, path: str, reason: str) -> "InputError":
        """Create error for an input file that exists but cannot be read."""
        return cls(
            f"Cannot read {path}: {reason}",
            code="input_unreadable",
            details={"path": path, "reason": reason},
        )
