"""Rich utilities: shared console, themes, and helpers."""

from __future__ import annotations

from rich.console import Console
from rich.theme import Theme
from rich.traceback import install as rich_traceback_install

# Style names used in checklist and table markup
THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "red",
        "success": "green",
        "muted": "grey62",
        "category": "bold cyan",
        "checked": "green",
    }
)

_console: Console | None = None


def get_console() -> Console:
    """Return a shared Rich Console instance.

    Creates the console on first use with the checklist theme.
    """
    global _console
    if _console is None:
        _console = Console(theme=THEME, highlight=False, soft_wrap=False)
    return _console


def install_rich_tracebacks() -> None:
    """Enable rich tracebacks globally for nicer error output."""
    rich_traceback_install(show_locals=False, word_wrap=True, suppress=["click"])
