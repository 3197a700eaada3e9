"""Rich Console factory and theme for squarectl output.

Consoles render into a StringIO buffer so renderers keep the
``render_result() -> str`` contract. In non-TTY environments (tests,
pipes) Rich drops color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SQUARE_THEME = Theme(
    {
        "sq.ok": "bold green",
        "sq.error": "bold red",
        "sq.op": "bold cyan",
        "sq.key": "dim",
        "sq.id": "bold blue",
        "sq.empty": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=SQUARE_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
