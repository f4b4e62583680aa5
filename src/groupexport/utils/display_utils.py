"""Display utilities for user interaction and progress display."""

import sys

import click

# Color constants for terminal output
RED = "\033[91m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
CYAN = "\033[96m"
RESET = "\033[0m"


def show_progress(count: int, page: int, operation: str = "Exporting") -> None:
    """Display an indeterminate progress line.

    The total member count is unknown until the last page arrives, so only
    the running count and page number are shown.

    Args:
        count: Rows written so far
        page: Pages fetched so far
        operation: Description of the operation being performed
    """
    sys.stderr.write(f"\r{operation}: {count} members (page {page})")
    sys.stderr.flush()


def finish_progress() -> None:
    """Terminate the progress line."""
    sys.stderr.write("\n")
    sys.stderr.flush()


def print_section_header(title: str) -> None:
    """Print a formatted section header.

    Args:
        title: Section title
    """
    click.echo(f"\n{CYAN}{'=' * 60}{RESET}")
    click.echo(f"{CYAN}{title.center(60)}{RESET}")
    click.echo(f"{CYAN}{'=' * 60}{RESET}")


def print_warning(message: str) -> None:
    """Print a warning message.

    Args:
        message: Warning message
    """
    click.echo(f"{YELLOW}WARNING: {message}{RESET}", err=True)


def print_success(message: str) -> None:
    """Print a success message.

    Args:
        message: Success message
    """
    click.echo(f"{GREEN}SUCCESS: {message}{RESET}")
