"""Group member data model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

# Top-level fields of an Okta user object, in display order.
BASELINE_ATTRIBUTES: tuple[str, ...] = (
    "id",
    "status",
    "created",
    "activated",
    "statusChanged",
    "lastLogin",
    "lastUpdated",
    "passwordChanged",
)

TIMESTAMP_ATTRIBUTES: frozenset[str] = frozenset(BASELINE_ATTRIBUTES) - {
    "id",
    "status",
}


class _Absent:
    """Marker for an attribute the record does not carry."""

    _instance: "_Absent | None" = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()


def _parse_timestamp(value: Any) -> Any:
    """Parse an ISO-8601 timestamp, returning the input unchanged on failure."""
    if not isinstance(value, str) or not value:
        return value
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value


@dataclass
class MemberRecord:
    """One group member as returned by the Okta API."""

    id: str
    status: str | None = None
    timestamps: dict[str, Any] = field(default_factory=dict)
    profile: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "MemberRecord":
        """Create a MemberRecord from an Okta API user object.

        Args:
            data: User object from the API response

        Returns:
            MemberRecord: Member with parsed timestamps
        """
        timestamps = {
            name: _parse_timestamp(data.get(name))
            for name in BASELINE_ATTRIBUTES
            if name in TIMESTAMP_ATTRIBUTES
        }
        return cls(
            id=data.get("id", ""),
            status=data.get("status"),
            timestamps=timestamps,
            profile=dict(data.get("profile") or {}),
        )

    def get(self, name: str) -> Any:
        """Look up an attribute by name.

        Baseline names resolve against the top-level fields, everything else
        against the profile bag. Missing or null values return ``ABSENT``.
        """
        if name == "id":
            value: Any = self.id
        elif name == "status":
            value = self.status
        elif name in TIMESTAMP_ATTRIBUTES:
            value = self.timestamps.get(name)
        else:
            value = self.profile.get(name)

        if value is None or (name == "id" and value == ""):
            return ABSENT
        return value

    @property
    def profile_keys(self) -> list[str]:
        """Names present in the profile bag."""
        return list(self.profile)
