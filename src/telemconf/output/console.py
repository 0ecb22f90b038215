"""Rich Console factory and theme for telemconf output.

Creates Console instances that render to a StringIO buffer so renderers
return plain strings. In non-TTY environments (tests, pipes) Rich
automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

TELEMCONF_THEME = Theme(
    {
        "tc.ok": "bold green",
        "tc.error": "bold red",
        "tc.warning": "bold yellow",
        "tc.key": "dim",
        "tc.type": "bold cyan",
        "tc.value": "bold",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=TELEMCONF_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
