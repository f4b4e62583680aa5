"""Core functionality for the Okta group member export tool."""

from groupexport.core.auth import doctor
from groupexport.core.client import ApiResponse, OktaClient, get_next_link
from groupexport.core.config import (
    API_TIMEOUT,
    ATTRIBUTE_SAMPLE_SIZE,
    GROUP_SEARCH_LIMIT,
    MEMBER_PAGE_LIMIT,
    build_export_config,
    check_env_file,
    get_base_url,
    validate_required,
)
from groupexport.core.exceptions import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    FileOperationError,
    GroupExportError,
    GroupResolutionError,
    ValidationError,
)

__all__ = [
    "API_TIMEOUT",
    "ATTRIBUTE_SAMPLE_SIZE",
    "GROUP_SEARCH_LIMIT",
    "MEMBER_PAGE_LIMIT",
    "APIError",
    "ApiResponse",
    "AuthenticationError",
    "ConfigurationError",
    "FileOperationError",
    "GroupExportError",
    "GroupResolutionError",
    "OktaClient",
    "ValidationError",
    "build_export_config",
    "check_env_file",
    "doctor",
    "get_base_url",
    "get_next_link",
    "validate_required",
]
