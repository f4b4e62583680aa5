"""Okta Group Member Export Tool - Main Package."""

from .core.client import ApiResponse, OktaClient
from .core.config import build_export_config, get_base_url
from .core.exceptions import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    FileOperationError,
    GroupExportError,
    GroupResolutionError,
    ValidationError,
)
from .models import ABSENT, ExportConfig, ExportResult, Group, MemberRecord
from .operations import (
    apply_toggle_command,
    discover_attributes,
    export_group_members,
    finalize_selection,
    flatten_member,
    format_value,
    iter_member_pages,
    order_attributes,
    resolve_group,
)

__version__ = "1.0.0"

__all__ = [
    # Core
    "ApiResponse",
    "OktaClient",
    "build_export_config",
    "get_base_url",
    # Exceptions
    "APIError",
    "AuthenticationError",
    "ConfigurationError",
    "FileOperationError",
    "GroupExportError",
    "GroupResolutionError",
    "ValidationError",
    # Models
    "ABSENT",
    "ExportConfig",
    "ExportResult",
    "Group",
    "MemberRecord",
    # Operations
    "apply_toggle_command",
    "discover_attributes",
    "export_group_members",
    "finalize_selection",
    "flatten_member",
    "format_value",
    "iter_member_pages",
    "order_attributes",
    "resolve_group",
]
