"""Interactive attribute checklist and group disambiguation prompts."""

from collections.abc import Callable

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.exceptions import ValidationError
from ..models.group import Group
from ..operations.attribute_ops import (
    apply_toggle_command,
    categorize_attributes,
    display_name,
    merge_extra_attributes,
    parse_attribute_list,
)
from ..utils.rich_utils import get_console

Prompt = Callable[[str], str]

TOGGLE_HELP = (
    "Toggle with numbers or ranges (e.g. 1,3-5), ALL or NONE. "
    "Press Enter when done."
)


def _default_prompt(text: str) -> str:
    return str(click.prompt(text, default="", show_default=False))


def render_checklist(
    options: list[str], selection: list[str], console: Console | None = None
) -> None:
    """Print the categorized, numbered checklist with the current state."""
    console = console or get_console()
    numbers = {name: index for index, name in enumerate(options, 1)}
    selected = set(selection)

    for category, members in categorize_attributes(options).items():
        console.print(f"\n[category]{category}[/category]")
        for name in members:
            mark = "[checked]\\[x][/checked]" if name in selected else "[ ]"
            label = display_name(name)
            suffix = f" [muted]({escape(name)})[/muted]" if label != name else ""
            console.print(f"  {numbers[name]:>3}. {mark} {escape(label)}{suffix}")

    console.print(f"\n[muted]{len(selection)} of {len(options)} selected[/muted]")


def interactive_select(
    options: list[str],
    initial: list[str],
    prompt: Prompt = _default_prompt,
    console: Console | None = None,
) -> list[str]:
    """Run the checklist loop until an empty command, then ask for extras.

    Args:
        options: Checklist entries in numbering order
        initial: Attributes checked when the loop starts
        prompt: Reads one line of input
        console: Console to render to

    Returns:
        List[str]: Selection in the order attributes were checked
    """
    console = console or get_console()
    selection = [name for name in initial if name in options]

    while True:
        render_checklist(options, selection, console)
        console.print(f"[info]{TOGGLE_HELP}[/info]")
        command = prompt("Toggle").strip()
        if not command:
            break
        try:
            selection = apply_toggle_command(selection, command, options)
        except ValidationError as e:
            console.print(f"[warning]{escape(str(e))}[/warning]")

    extras = parse_attribute_list(
        prompt("Additional attribute names (comma-separated, Enter to skip)")
    )
    return merge_extra_attributes(selection, extras)


def render_group_candidates(groups: list[Group], console: Console | None = None) -> None:
    """Print a numbered table of candidate groups."""
    console = console or get_console()
    table = Table(title="Multiple groups match", show_lines=False)
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("ID", style="muted")
    table.add_column("Description")
    for index, group in enumerate(groups, 1):
        table.add_row(
            str(index), escape(group.name), group.id, escape(group.description or "")
        )
    console.print(table)


def choose_group(groups: list[Group]) -> str:
    """Ask the user to pick one of several matching groups."""
    render_group_candidates(groups)
    return _default_prompt(f"Select a group [1-{len(groups)}]")
