"""URL encoding utilities for Okta API operations."""

from urllib.parse import quote


def encode_path_segment(value: str, context: str = "path segment") -> str:
    """URL encode a value for use as a single path segment.

    Args:
        value: Value to encode
        context: Context description for error messages

    Returns:
        str: Encoded value with ``/`` and other reserved characters escaped

    Raises:
        ValueError: If value is empty

    Example:
        >>> encode_path_segment("00g1abcdEFGH2ijkl3m4", "group ID")
        '00g1abcdEFGH2ijkl3m4'
    """
    if not value or not value.strip():
        raise ValueError(f"{context} cannot be empty")
    return quote(value.strip(), safe="")


def encode_group_id(group_id: str) -> str:
    """URL encode an Okta group ID.

    Args:
        group_id: Okta group ID

    Returns:
        str: URL-encoded group ID

    Raises:
        ValueError: If group_id is empty
    """
    return encode_path_segment(group_id, "group ID")
