"""Rich Console factory and theme for staffboard output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

BOARD_THEME = Theme(
    {
        "sb.ok": "bold green",
        "sb.error": "bold red",
        "sb.warning": "bold yellow",
        "sb.op": "bold cyan",
        "sb.key": "dim",
        "sb.id": "bold blue",
        "sb.coord": "bold magenta",
        "sb.title": "bold",
        "sb.kind.employee": "green",
        "sb.kind.department": "bold yellow",
        "sb.block.left": "blue",
        "sb.block.right": "green",
        "sb.empty": "dim",
    }
)

_KIND_STYLES: dict[str, str] = {
    "employee": "sb.kind.employee",
    "department": "sb.kind.department",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (the full board needs more than 120).
    """
    return Console(
        file=StringIO(),
        theme=BOARD_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(kind: str) -> str:
    """Return the Rich style name for an entity kind."""
    return _KIND_STYLES.get(kind, "")
