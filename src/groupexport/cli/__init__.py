"""CLI module for the Okta group member export tool."""

from .commands import OperationHandler
from .main import cli, main
from .selection import choose_group, interactive_select, render_checklist

__all__ = [
    "OperationHandler",
    "choose_group",
    "cli",
    "interactive_select",
    "main",
    "render_checklist",
]
