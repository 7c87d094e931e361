"""
CLI display components for stream-json sessions.

Provides different output formats for rendering a parsed session:
- VerboseDisplay: Rich terminal UI with colors, panels and a usage line
- CompactDisplay: Minimal output showing only streamed text and errors
- JsonDisplay: One JSON summary object for scripting and debugging
"""

from abc import ABC, abstractmethod
import json
import re

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel

from .._streaming import CliStream
from .._types import CliUsage, StreamJsonCallbacks


class StreamDisplay(ABC):
    """Base class for stream display renderers."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def callbacks(self) -> StreamJsonCallbacks:
        """Bind this display's handlers as parser observers."""
        return StreamJsonCallbacks(
            on_text=self.on_text,
            on_tool_use=self.on_tool_use,
            on_session_id=self.on_session_id,
            on_usage=self.on_usage,
            on_error=self.on_error,
        )

    def start(self) -> None:
        """Start the display (called before the first chunk)."""

    def on_text(self, text: str) -> None:
        pass

    def on_tool_use(self, name: str) -> None:
        pass

    def on_session_id(self, session_id: str) -> None:
        pass

    def on_usage(self, usage: CliUsage) -> None:
        pass

    def on_error(self, message: str) -> None:
        pass

    @abstractmethod
    def finish(self, stream: CliStream) -> None:
        """
        Finish the display (called after the stream is flushed).

        Args:
            stream: Completed stream holding the accumulated session state
        """


class CompactDisplay(StreamDisplay):
    """
    Compact display showing only streamed text.

    Minimal output - prints text as it arrives plus any upstream error.
    """

    def on_text(self, text: str) -> None:
        print(text, end="", flush=True)

    def on_error(self, message: str) -> None:
        self.console.print(f"\n[red]❌ Error: {escape(message)}[/red]")

    def finish(self, stream: CliStream) -> None:
        """Finish with newline."""
        if stream.text:
            print()


class VerboseDisplay(StreamDisplay):
    """
    Verbose display with rich terminal UI.

    Shows:
    - Session id once established
    - Real-time text streaming
    - Tool calls as they start
    - Errors in a red panel
    - Final usage line and response panel
    """

    def __init__(self, console: Console | None = None) -> None:
        super().__init__(console=console)
        self.streamed_chars = 0

    def on_session_id(self, session_id: str) -> None:
        self.console.print(f"[dim]Session: {escape(session_id)}[/dim]")

    def on_text(self, text: str) -> None:
        self.streamed_chars += len(text)
        self.console.print(text, end="", style="white", markup=False, highlight=False)

    def on_tool_use(self, name: str) -> None:
        self.console.print()
        self.console.print(
            f"[bold cyan]⚡ Calling tool:[/bold cyan] [yellow]{escape(name)}[/yellow]"
        )

    def on_error(self, message: str) -> None:
        self.console.print(
            Panel(f"[red]{escape(message)}[/red]", title="[red]❌ Error[/red]", border_style="red")
        )

    def finish(self, stream: CliStream) -> None:
        if self.streamed_chars:
            self.console.print()

        usage_line = format_usage(stream.usage)
        if usage_line:
            self.console.print(f"\n[dim]Usage: {usage_line}[/dim]")

        final_text = stream.text
        if final_text.strip():
            self.console.print()
            self.console.print(_response_panel(final_text))


class JsonDisplay(StreamDisplay):
    """
    JSON display for machine consumption.

    Prints a single summary object once the stream ends. Useful for:
    - Scripting and automation
    - Debugging recorded sessions
    """

    def finish(self, stream: CliStream) -> None:
        summary = {
            "text": stream.text,
            "session_id": stream.session_id,
            "usage": stream.usage.to_dict() if stream.usage else None,
            "tools": stream.tools_used,
            "errors": stream.errors,
        }
        print(json.dumps(summary), flush=True)


def format_usage(usage: CliUsage | None) -> str:
    """Render set usage counters as ``name=value`` pairs."""
    if usage is None:
        return ""
    return ", ".join(f"{name}={value}" for name, value in usage.to_dict().items())


_TASK_LIST_PATTERN = re.compile(r"^(\s*[-*]\s+)\[([ xX])\]\s+(.*)$", flags=re.MULTILINE)


def _normalize_markdown(text: str) -> str:
    """Apply small GitHub-flavored markdown tweaks Rich lacks natively."""

    def replace(match: re.Match[str]) -> str:
        prefix, state, content = match.groups()
        symbol = "☑" if state.lower() == "x" else "☐"
        return f"{prefix}{symbol} {content}"

    return _TASK_LIST_PATTERN.sub(replace, text)


def _response_panel(text: str) -> Panel:
    """Render the final response as markdown inside a cyan panel."""
    markdown = Markdown(_normalize_markdown(text), code_theme="monokai", justify="left")
    return Panel(markdown, title="[cyan]Response[/cyan]", border_style="cyan", expand=True)


DISPLAY_FORMATS = ("verbose", "compact", "json")


def create_display(format: str = "verbose", console: Console | None = None) -> StreamDisplay:
    """
    Factory function to create appropriate display.

    Args:
        format: Display format ("verbose", "compact", or "json")
        console: Optional rich console to render into

    Returns:
        StreamDisplay instance
    """
    if format == "compact":
        return CompactDisplay(console=console)
    elif format == "json":
        return JsonDisplay(console=console)
    else:  # "verbose" is default
        return VerboseDisplay(console=console)
