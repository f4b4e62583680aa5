"""Data models for the group export tool."""

from groupexport.models.config import ExportConfig
from groupexport.models.export import ExportResult
from groupexport.models.group import Group
from groupexport.models.member import (
    ABSENT,
    BASELINE_ATTRIBUTES,
    TIMESTAMP_ATTRIBUTES,
    MemberRecord,
)

__all__ = [
    "ABSENT",
    "BASELINE_ATTRIBUTES",
    "TIMESTAMP_ATTRIBUTES",
    "ExportConfig",
    "ExportResult",
    "Group",
    "MemberRecord",
]
