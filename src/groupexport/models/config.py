"""Configuration data models for the group export tool."""

from dataclasses import dataclass
from typing import Any


@dataclass
class ExportConfig:
    """Resolved settings for a single export run."""

    org: str
    base_url: str
    token: str
    group: str | None = None
    output_file: str | None = None
    quick: bool = False
    extra_attributes: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary format.

        Returns:
            Dict[str, Any]: Configuration as dictionary
        """
        return {
            "org": self.org,
            "base_url": self.base_url,
            "token": "***REDACTED***",  # Don't expose secrets
            "group": self.group,
            "output_file": self.output_file,
            "quick": self.quick,
            "extra_attributes": self.extra_attributes,
        }

