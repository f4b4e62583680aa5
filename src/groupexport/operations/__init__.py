"""Operations module for the Okta group member export tool."""

from .attribute_ops import (
    ATTRIBUTE_CATEGORIES,
    ATTRIBUTE_PRIORITY,
    DISPLAY_NAMES,
    QUICK_ATTRIBUTES,
    apply_toggle_command,
    categorize_attributes,
    checklist_options,
    discover_attributes,
    display_name,
    finalize_selection,
    merge_extra_attributes,
    order_attributes,
    parse_attribute_list,
    parse_toggle_indices,
    quick_selection,
)
from .export_ops import (
    default_output_filename,
    export_group_members,
    flatten_member,
    format_value,
    iter_member_pages,
)
from .group_ops import (
    get_group_by_id,
    is_group_id,
    resolve_group,
    search_groups,
    select_group_choice,
)

__all__ = [
    # Attribute operations
    "ATTRIBUTE_CATEGORIES",
    "ATTRIBUTE_PRIORITY",
    "DISPLAY_NAMES",
    "QUICK_ATTRIBUTES",
    "apply_toggle_command",
    "categorize_attributes",
    "checklist_options",
    "discover_attributes",
    "display_name",
    "finalize_selection",
    "merge_extra_attributes",
    "order_attributes",
    "parse_attribute_list",
    "parse_toggle_indices",
    "quick_selection",
    # Export operations
    "default_output_filename",
    "export_group_members",
    "flatten_member",
    "format_value",
    "iter_member_pages",
    # Group operations
    "get_group_by_id",
    "is_group_id",
    "resolve_group",
    "search_groups",
    "select_group_choice",
]
