"""Group data model."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Group:
    """An Okta group resolved for export."""

    id: str
    name: str
    description: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Group":
        """Create a Group from an Okta API group object.

        Args:
            data: Group object from the API response

        Returns:
            Group: Group instance
        """
        profile = data.get("profile") or {}
        return cls(
            id=data.get("id", ""),
            name=profile.get("name") or data.get("id", ""),
            description=profile.get("description"),
        )

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"
