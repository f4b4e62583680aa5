"""Attribute discovery, selection and ordering.

Everything here except ``discover_attributes`` is pure: the interactive
checklist in ``cli.selection`` only renders state and feeds commands into
these functions.
"""

from collections.abc import Iterable

from ..core.client import OktaClient
from ..core.config import ATTRIBUTE_SAMPLE_SIZE
from ..core.exceptions import APIError, ValidationError
from ..models.member import BASELINE_ATTRIBUTES, MemberRecord
from ..utils.logging_utils import get_logger
from ..utils.url_utils import encode_group_id

logger = get_logger(__name__)

QUICK_ATTRIBUTES: tuple[str, ...] = (
    "id",
    "login",
    "email",
    "firstName",
    "lastName",
    "status",
    "created",
    "lastLogin",
)

ATTRIBUTE_PRIORITY: tuple[str, ...] = (
    "id",
    "login",
    "email",
    "firstName",
    "lastName",
    "displayName",
    "status",
    "created",
    "activated",
    "statusChanged",
    "lastLogin",
    "lastUpdated",
    "passwordChanged",
    "title",
    "department",
    "division",
    "organization",
    "manager",
    "employeeNumber",
    "mobilePhone",
    "primaryPhone",
    "city",
    "state",
    "countryCode",
)

CUSTOM_CATEGORY = "Custom"

ATTRIBUTE_CATEGORIES: dict[str, tuple[str, ...]] = {
    "System": BASELINE_ATTRIBUTES,
    "Identity": (
        "login",
        "email",
        "secondEmail",
        "firstName",
        "middleName",
        "lastName",
        "honorificPrefix",
        "honorificSuffix",
        "displayName",
        "nickName",
        "profileUrl",
    ),
    "Contact": (
        "mobilePhone",
        "primaryPhone",
        "streetAddress",
        "city",
        "state",
        "zipCode",
        "countryCode",
        "postalAddress",
    ),
    "Organization": (
        "title",
        "userType",
        "employeeNumber",
        "costCenter",
        "organization",
        "division",
        "department",
        "manager",
        "managerId",
    ),
    "Locale": (
        "preferredLanguage",
        "locale",
        "timezone",
    ),
}

DISPLAY_NAMES: dict[str, str] = {
    "id": "User ID",
    "status": "Status",
    "created": "Created",
    "activated": "Activated",
    "statusChanged": "Status Changed",
    "lastLogin": "Last Login",
    "lastUpdated": "Last Updated",
    "passwordChanged": "Password Changed",
    "login": "Username",
    "email": "Email",
    "secondEmail": "Secondary Email",
    "firstName": "First Name",
    "middleName": "Middle Name",
    "lastName": "Last Name",
    "honorificPrefix": "Honorific Prefix",
    "honorificSuffix": "Honorific Suffix",
    "displayName": "Display Name",
    "nickName": "Nickname",
    "profileUrl": "Profile URL",
    "mobilePhone": "Mobile Phone",
    "primaryPhone": "Primary Phone",
    "streetAddress": "Street Address",
    "city": "City",
    "state": "State",
    "zipCode": "Zip Code",
    "countryCode": "Country Code",
    "postalAddress": "Postal Address",
    "title": "Title",
    "userType": "User Type",
    "employeeNumber": "Employee Number",
    "costCenter": "Cost Center",
    "organization": "Organization",
    "division": "Division",
    "department": "Department",
    "manager": "Manager",
    "managerId": "Manager ID",
    "preferredLanguage": "Preferred Language",
    "locale": "Locale",
    "timezone": "Time Zone",
}


def display_name(attribute: str) -> str:
    """Column label for an attribute, falling back to the raw name."""
    return DISPLAY_NAMES.get(attribute, attribute)


def discover_attributes(
    client: OktaClient, group_id: str, sample_size: int = ATTRIBUTE_SAMPLE_SIZE
) -> list[str]:
    """Enumerate the attributes available for a group's members.

    Samples the first few members and unions their profile keys with the
    baseline attributes.

    Args:
        client: Okta API client
        group_id: Group to sample
        sample_size: Number of members to sample

    Returns:
        List[str]: Sorted, de-duplicated attribute names
    """
    path = f"/api/v1/groups/{encode_group_id(group_id)}/users"
    response = client.get(path, params={"limit": sample_size})
    if not isinstance(response.data, list):
        raise APIError(
            "Unexpected response format for group members",
            endpoint=path,
            details=f"expected list, got {type(response.data).__name__}",
        )

    names = set(BASELINE_ATTRIBUTES)
    for user in response.data:
        if isinstance(user, dict):
            names.update(MemberRecord.from_api(user).profile_keys)

    logger.info(
        f"Discovered {len(names)} attributes from {len(response.data)} sampled members",
        extra={"operation": "discover_attributes", "group_id": group_id},
    )
    return sorted(names)


def categorize_attributes(attributes: Iterable[str]) -> dict[str, list[str]]:
    """Group attributes into the checklist categories.

    Named categories list their members in the category's fixed order; the
    custom category keeps the input order. Empty categories are omitted.
    """
    available = list(dict.fromkeys(attributes))
    available_set = set(available)
    categorized: dict[str, list[str]] = {}
    claimed: set[str] = set()

    for category, members in ATTRIBUTE_CATEGORIES.items():
        present = [name for name in members if name in available_set]
        if present:
            categorized[category] = present
        claimed.update(members)

    custom = [name for name in available if name not in claimed]
    if custom:
        categorized[CUSTOM_CATEGORY] = custom
    return categorized


def checklist_options(attributes: Iterable[str]) -> list[str]:
    """Flatten the categorized attributes into checklist numbering order."""
    return [
        name
        for members in categorize_attributes(attributes).values()
        for name in members
    ]


def parse_toggle_indices(command: str, count: int) -> list[int]:
    """Parse a toggle command such as ``1,3-4`` into 1-based indices.

    Ranges may run in either direction. Numbers outside ``1..count`` are
    dropped and repeated numbers collapse to one.

    Raises:
        ValidationError: If a token is neither a number nor a range
    """
    indices: list[int] = []
    for token in command.split(","):
        token = token.strip()
        if not token:
            continue

        try:
            if "-" in token:
                start_text, end_text = token.split("-", 1)
                start, end = int(start_text), int(end_text)
                if start > end:
                    start, end = end, start
                indices.extend(range(start, end + 1))
            else:
                indices.append(int(token))
        except ValueError:
            raise ValidationError(
                "Invalid toggle command",
                field="command",
                value=token,
                details="use numbers, ranges like 2-5, ALL or NONE",
            ) from None

    return [index for index in dict.fromkeys(indices) if 1 <= index <= count]


def apply_toggle_command(
    selection: list[str], command: str, options: list[str]
) -> list[str]:
    """Apply one checklist command and return the new selection.

    ``ALL`` selects every option, ``NONE`` clears the selection and anything
    else is parsed by ``parse_toggle_indices``; each referenced option is
    removed if selected and appended otherwise.
    """
    keyword = command.strip().upper()
    if keyword == "ALL":
        return list(options)
    if keyword == "NONE":
        return []

    result = list(selection)
    for index in parse_toggle_indices(command, len(options)):
        name = options[index - 1]
        if name in result:
            result.remove(name)
        else:
            result.append(name)
    return result


def parse_attribute_list(text: str | None) -> list[str]:
    """Split a comma-separated attribute list into unique names."""
    if not text:
        return []
    names = (part.strip() for part in text.split(","))
    return list(dict.fromkeys(name for name in names if name))


def merge_extra_attributes(selection: list[str], extras: Iterable[str]) -> list[str]:
    """Append extra attribute names that are not already selected."""
    result = list(selection)
    for name in extras:
        if name not in result:
            result.append(name)
    return result


def order_attributes(
    selection: Iterable[str], priority: Iterable[str] = ATTRIBUTE_PRIORITY
) -> list[str]:
    """Order a selection by the priority list, remainder in selection order."""
    selected = list(dict.fromkeys(selection))
    selected_set = set(selected)
    priority_list = list(dict.fromkeys(priority))

    head = [name for name in priority_list if name in selected_set]
    head_set = set(head)
    tail = [name for name in selected if name not in head_set]
    return head + tail


def finalize_selection(selection: Iterable[str]) -> list[str]:
    """Validate and order the final attribute selection.

    Raises:
        ValidationError: If nothing is selected
    """
    ordered = order_attributes(selection)
    if not ordered:
        raise ValidationError("No attributes selected", field="attributes")
    return ordered


def quick_selection(extras: Iterable[str] = ()) -> list[str]:
    """Selection used when interaction is skipped."""
    return merge_extra_attributes(list(QUICK_ATTRIBUTES), extras)
