"""Rich Console factory and theme for lineup output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

LINEUP_THEME = Theme(
    {
        "lineup.ok": "bold green",
        "lineup.error": "bold red",
        "lineup.warning": "bold yellow",
        "lineup.op": "bold cyan",
        "lineup.key": "dim",
        "lineup.id": "bold blue",
        "lineup.money": "bold magenta",
        "lineup.kind.team": "green",
        "lineup.kind.pizza": "yellow",
    }
)

_KIND_STYLES: dict[str, str] = {
    "team": "lineup.kind.team",
    "pizza": "lineup.kind.pizza",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=LINEUP_THEME,
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
