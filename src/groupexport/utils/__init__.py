"""Utilities module for the Okta group member export tool."""

from .display_utils import (
    finish_progress,
    print_section_header,
    print_success,
    print_warning,
    show_progress,
)
from .logging_utils import get_logger, setup_logging
from .rich_utils import THEME, get_console, install_rich_tracebacks
from .url_utils import encode_group_id, encode_path_segment

__all__ = [
    # Display utilities
    "finish_progress",
    "print_section_header",
    "print_success",
    "print_warning",
    "show_progress",
    # Logging utilities
    "get_logger",
    "setup_logging",
    # Rich utilities
    "THEME",
    "get_console",
    "install_rich_tracebacks",
    # URL utilities
    "encode_group_id",
    "encode_path_segment",
]
