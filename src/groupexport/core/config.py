"""Configuration utilities for Okta API access."""

import os
import re

import dotenv

from ..models.config import ExportConfig
from .exceptions import ConfigurationError

# Global constants for API configuration
API_TIMEOUT = 30  # request timeout in seconds
MEMBER_PAGE_LIMIT = 200  # Okta's maximum page size for group members
GROUP_SEARCH_LIMIT = 10
ATTRIBUTE_SAMPLE_SIZE = 10
USER_AGENT = "GroupExport/1.0 (Okta Group Member Export Tool)"

# Environment variable names
ENV_ORG = "OKTA_ORG"
ENV_TOKEN = "OKTA_API_TOKEN"
ENV_GROUP = "OKTA_GROUP"
ENV_OUTPUT_FILE = "OKTA_OUTPUT_FILE"
ENV_EXTRA_ATTRIBUTES = "OKTA_EXTRA_ATTRIBUTES"

_ORG_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9-]*$")
_ORG_HOST_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9.-]*\.[A-Za-z]{2,}$")


def check_env_file() -> None:
    """Check if .env file exists and load it."""
    env_path = ".env"
    if os.path.exists(env_path):
        dotenv.load_dotenv(env_path)


def env_value(name: str) -> str | None:
    """Return a stripped environment variable, or None when unset or blank."""
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def validate_required(name: str, value: str | None) -> str:
    """Validate that a required setting is present and not empty.

    Args:
        name: Human-readable setting name
        value: Setting value

    Returns:
        str: The stripped value

    Raises:
        ConfigurationError: If the value is missing or empty
    """
    if value is None or not value.strip():
        raise ConfigurationError(f"{name} is required but was not provided")
    return value.strip()


def get_base_url(org: str) -> str:
    """Build the Okta API base URL for an org identifier.

    Accepts a bare org name (``acme``), a full host name
    (``acme.oktapreview.com``) or a complete URL (``https://login.acme.com``).

    Args:
        org: Org identifier

    Returns:
        str: Base URL without a trailing slash

    Raises:
        ConfigurationError: If the org identifier is malformed
    """
    org = validate_required("Okta org", org)

    if org.startswith(("https://", "http://")):
        return org.rstrip("/")

    if _ORG_NAME_PATTERN.match(org):
        return f"https://{org}.okta.com"

    if _ORG_HOST_PATTERN.match(org):
        return f"https://{org}"

    raise ConfigurationError(
        f"Invalid Okta org: {org}",
        details="Use an org name (acme), a host (acme.okta.com) or a URL",
    )


def build_export_config(
    org: str | None,
    token: str | None,
    group: str | None = None,
    output_file: str | None = None,
    quick: bool = False,
    extra_attributes: str | None = None,
) -> ExportConfig:
    """Create an ExportConfig after validating org and token.

    Args:
        org: Org identifier
        token: Okta API token
        group: Group ID or name, resolved later
        output_file: Output CSV path, chosen later if None
        quick: Skip interactive attribute selection
        extra_attributes: Comma-separated extra attribute names

    Returns:
        ExportConfig: Validated configuration

    Raises:
        ConfigurationError: If org or token is missing or invalid
    """
    base_url = get_base_url(org or "")
    token = validate_required("Okta API token", token)

    return ExportConfig(
        org=org.strip() if org else "",
        base_url=base_url,
        token=token,
        group=group.strip() if group else None,
        output_file=output_file.strip() if output_file else None,
        quick=quick,
        extra_attributes=extra_attributes,
    )
