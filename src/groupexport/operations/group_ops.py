"""Group resolution operations."""

import re
from collections.abc import Callable
from typing import Any

from ..core.client import OktaClient
from ..core.config import GROUP_SEARCH_LIMIT
from ..core.exceptions import APIError, GroupResolutionError
from ..models.group import Group
from ..utils.logging_utils import get_logger
from ..utils.url_utils import encode_group_id

logger = get_logger(__name__)

GROUP_ID_PATTERN = re.compile(r"^00g[A-Za-z0-9]{17}$")

# Receives the candidate groups and returns the user's raw 1-based choice.
GroupChooser = Callable[[list[Group]], str | int]


def is_group_id(identifier: str) -> bool:
    """Check whether an identifier has the shape of an Okta group ID.

    Args:
        identifier: Group ID or free-text name

    Returns:
        bool: True if identifier looks like a group ID
    """
    return bool(GROUP_ID_PATTERN.match(identifier.strip()))


def get_group_by_id(client: OktaClient, group_id: str) -> Group:
    """Fetch a group by its ID.

    Raises:
        GroupResolutionError: If the group does not exist
    """
    path = f"/api/v1/groups/{encode_group_id(group_id)}"
    try:
        response = client.get(path)
    except APIError as e:
        if e.status_code == 404:
            raise GroupResolutionError(
                "Group not found", identifier=group_id
            ) from e
        raise

    if not isinstance(response.data, dict):
        raise APIError(
            "Unexpected response format for group lookup",
            endpoint=path,
            details=f"expected object, got {type(response.data).__name__}",
        )
    return Group.from_api(response.data)


def search_groups(
    client: OktaClient, query: str, limit: int = GROUP_SEARCH_LIMIT
) -> list[Group]:
    """Search groups by name prefix.

    Args:
        client: Okta API client
        query: Free-text group name
        limit: Maximum number of results

    Returns:
        List[Group]: Matching groups in API order
    """
    response = client.get("/api/v1/groups", params={"q": query, "limit": limit})
    data: Any = response.data
    if not isinstance(data, list):
        raise APIError(
            "Unexpected response format for group search",
            endpoint="/api/v1/groups",
            details=f"expected list, got {type(data).__name__}",
        )

    groups = [Group.from_api(item) for item in data if isinstance(item, dict)]
    logger.info(
        f"Found {len(groups)} group(s) matching '{query}'",
        extra={"operation": "search_groups"},
    )
    return groups


def select_group_choice(groups: list[Group], choice: str | int) -> Group:
    """Pick a group from a numbered candidate list.

    Args:
        groups: Candidates as shown to the user
        choice: 1-based choice as typed by the user

    Returns:
        Group: The chosen group

    Raises:
        GroupResolutionError: If the choice is not a valid number
    """
    try:
        index = int(str(choice).strip())
    except ValueError:
        raise GroupResolutionError(
            "Invalid group selection", details=f"'{choice}' is not a number"
        ) from None

    if not 1 <= index <= len(groups):
        raise GroupResolutionError(
            "Invalid group selection",
            details=f"choose a number between 1 and {len(groups)}",
        )
    return groups[index - 1]


def resolve_group(
    client: OktaClient, identifier: str, choose: GroupChooser
) -> Group:
    """Resolve a group ID or name to exactly one group.

    Args:
        client: Okta API client
        identifier: Group ID or free-text group name
        choose: Called with the candidates when a name matches several groups

    Returns:
        Group: The resolved group

    Raises:
        GroupResolutionError: If no group matches or the choice is invalid
    """
    identifier = identifier.strip()
    if not identifier:
        raise GroupResolutionError("Group identifier cannot be empty")

    if is_group_id(identifier):
        group = get_group_by_id(client, identifier)
        logger.info(
            f"Resolved group {group}",
            extra={"operation": "resolve_group", "group_id": group.id},
        )
        return group

    groups = search_groups(client, identifier)
    if not groups:
        raise GroupResolutionError("No group found", identifier=identifier)

    if len(groups) == 1:
        group = groups[0]
    else:
        group = select_group_choice(groups, choose(groups))

    logger.info(
        f"Resolved group {group}",
        extra={"operation": "resolve_group", "group_id": group.id},
    )
    return group
