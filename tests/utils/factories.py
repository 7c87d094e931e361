"""Test data factories for stream-json sessions."""

import json
from typing import Any


def line(obj: dict[str, Any]) -> str:
    """Serialize one event as a newline-terminated JSONL line."""
    return json.dumps(obj) + "\n"


class StreamJsonFactory:
    """Factory for creating stream-json events."""

    @staticmethod
    def system_init(session_id: str = "sess-123") -> dict[str, Any]:
        return {"type": "system", "subtype": "init", "session_id": session_id}

    @staticmethod
    def text_delta(text: str, index: int = 0) -> dict[str, Any]:
        return {
            "type": "content_block_delta",
            "index": index,
            "delta": {"type": "text_delta", "text": text},
        }

    @staticmethod
    def tool_use_start(name: str = "Read", index: int = 1) -> dict[str, Any]:
        return {
            "type": "content_block_start",
            "index": index,
            "content_block": {"type": "tool_use", "id": f"toolu_{index:02d}", "name": name},
        }

    @staticmethod
    def result(
        result: str | None = "done",
        session_id: str | None = "sess-123",
        usage: dict[str, Any] | None = None,
        is_error: bool | None = None,
        subtype: str = "success",
    ) -> dict[str, Any]:
        """Create a terminal result event; None fields are omitted."""
        event: dict[str, Any] = {"type": "result", "subtype": subtype}
        if session_id is not None:
            event["session_id"] = session_id
        if result is not None:
            event["result"] = result
        if usage is not None:
            event["usage"] = usage
        if is_error is not None:
            event["is_error"] = is_error
        return event

    @classmethod
    def session(cls) -> str:
        """A full session as one JSONL string."""
        events = [
            cls.system_init("abc-123"),
            {
                "type": "content_block_start",
                "index": 0,
                "content_block": {"type": "text", "text": ""},
            },
            cls.text_delta("Hello"),
            cls.text_delta(", "),
            cls.text_delta("world!"),
            {"type": "content_block_stop", "index": 0},
            {"type": "message_stop"},
            cls.result(
                result="Hello, world!",
                session_id="abc-123",
                usage={"input_tokens": 50, "output_tokens": 10},
                is_error=False,
            ),
        ]
        return "".join(line(event) for event in events)
